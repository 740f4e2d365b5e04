from .utils_lib import UtilsLib

__all__ = ["UtilsLib"]
