"""Dashboard cache library: bounded TTL cache for voter dashboard responses."""

from ballot_api.lib.dashboard_cache.cache import CacheStats, DashboardCache

__all__ = ["CacheStats", "DashboardCache"]
