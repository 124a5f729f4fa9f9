"""Recipe Keeper - personal recipe manager with compound recipes."""

from recipe_keeper.utils.constants import APP_VERSION as __version__

__all__ = ["__version__"]
