__all__ = ["limb_dark"]

from synthlc.core import limb_dark as limb_dark
