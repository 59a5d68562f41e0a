"""Hard-link mod manager for Bethesda games."""

from modlinker.manager import ModManager
from modlinker.Utils.collection import Entry, ModEntry, OrderedCollection, PluginEntry
from modlinker.Utils.deploy import CrossVolumeError, DeployResult, deploy_overlay
from modlinker.Utils.unpack import ExternalProcessError

__version__ = "0.1.0"

__all__ = [
    "CrossVolumeError",
    "DeployResult",
    "Entry",
    "ExternalProcessError",
    "ModEntry",
    "ModManager",
    "OrderedCollection",
    "PluginEntry",
    "deploy_overlay",
]
