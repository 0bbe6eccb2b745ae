"""Network reachability signal."""

import logging

logger = logging.getLogger(__name__)


class ConnectivitySignal:
    """Boolean "is the network reachable" flag with transition tracking."""

    def __init__(self, online: bool = True):
        self._online = online

    @property
    def online(self) -> bool:
        return self._online

    def set(self, online: bool) -> bool:
        """Record the current state. Returns True if it changed."""
        changed = online != self._online
        self._online = online
        if changed:
            logger.info("Connectivity changed: %s", "online" if online else "offline")
        return changed
