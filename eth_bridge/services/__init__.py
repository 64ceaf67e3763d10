from .amounts import format_ether, get_random_amount, parse_ether
from .keys import load_private_keys

__all__ = ["format_ether", "get_random_amount", "load_private_keys", "parse_ether"]
