from dotenv import load_dotenv

from infrastructure.logging import get_module_logger
from server import server

load_dotenv()

server_app = server.handler
logger = get_module_logger()
