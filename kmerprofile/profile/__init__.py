# profile/__init__.py
"""
Profile container
=================

``Profile`` holds the ordered (k-mer, frequency) pairs of one species or
sample, ``GrowableBuffer``/``GrowthPolicy`` its storage, and ``codecs`` the
text/binary file formats.
"""

from .codecs import BinaryCodec, ProfileCodec, ProfileFormat, TextCodec, codec_for_magic, codec_for_mode
from .profile import Profile
from .storage import GrowableBuffer, GrowthPolicy

__all__ = [
    "Profile",
    "ProfileFormat",
    "ProfileCodec",
    "TextCodec",
    "BinaryCodec",
    "codec_for_mode",
    "codec_for_magic",
    "GrowableBuffer",
    "GrowthPolicy",
]
