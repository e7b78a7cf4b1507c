from utils.logger import logger
from utils.screenshot import save_png
from utils.data_loader import load_json, get_test_ids
from utils.decorators import best_effort, timer

__all__ = [
    "logger",
    "save_png",
    "load_json",
    "get_test_ids",
    "best_effort",
    "timer",
]
