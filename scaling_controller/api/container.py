#scaling_controller\api\container.py
from functools import lru_cache

from scaling_controller.container import build_controller
from scaling_controller.controller.controller import Controller
from scaling_controller.dispatch.publisher import NullPublisher


@lru_cache(maxsize=1)
def get_controller() -> Controller:
    # The API only plans; it never publishes.
    return build_controller(publisher=NullPublisher())
