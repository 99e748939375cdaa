from typing import Optional

from neattabs.config.settings import Settings, settings as default_settings
from neattabs.grouping.services.grouping_session import GroupingSession
from neattabs.host.adapters.http_browser_host import HttpBrowserHost
from neattabs.host.interfaces.browser_host import BrowserHost
from neattabs.preferences.services.preferences_cache import GroupingPreferencesCache
from neattabs.preferences.store.preferences_store import GroupingPreferencesStore, SqlGroupingPreferencesStore


def build_session(
    host: BrowserHost,
    store: GroupingPreferencesStore,
) -> GroupingSession:
    """
    Wire a GroupingSession; writes default preferences on first run.
    """
    store.ensure_defaults()
    return GroupingSession(host=host, preferences=GroupingPreferencesCache(store))


def build_default_session(config: Optional[Settings] = None) -> GroupingSession:
    config = config or default_settings
    host = HttpBrowserHost(
        config.HOST_BRIDGE_URL,
        token=config.BRIDGE_SECRET_TOKEN,
        max_retries=config.HOST_BRIDGE_MAX_RETRIES,
        timeout=config.HOST_BRIDGE_TIMEOUT,
    )
    store = SqlGroupingPreferencesStore.from_dsn(config.DATABASE_URL)
    return build_session(host, store)
