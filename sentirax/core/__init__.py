from sentirax.core.context import CoreContext

__all__ = ["CoreContext"]
