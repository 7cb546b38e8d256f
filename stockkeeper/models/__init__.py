from stockkeeper.models.user import User
from stockkeeper.models.inventory import Inventory

__all__ = ["User", "Inventory"]
