"""Infrastructure modules for the intl runtime application.

Centralized infrastructure components:
- configuration: Settings management (settings, IntlSettings)
- logging: Structured logging and request context binding
- intl: Request-scoped translation runtime and message compiler
- services: Dependency injection providers (SettingsDep, IntlDep, RequestScopeDep)
"""
