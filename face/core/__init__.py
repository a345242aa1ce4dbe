from .dashboard import Dashboard
from .hub import BroadcastHub, Heartbeat

__all__ = ["BroadcastHub", "Dashboard", "Heartbeat"]
