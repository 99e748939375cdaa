from concurrent.futures import CancelledError
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException
import uvicorn

from neattabs.config.settings import settings
from neattabs.grouping.domain.page_event import PageEventKind
from neattabs.grouping.services.grouping_session import GroupingSession
from neattabs.host.domain.host_errors import HostError
from neattabs.host.domain.host_operation_result import HostOperationResult
from neattabs.infrastructure.inbound.bridge_security import BridgeSecurityService
from neattabs.infrastructure.inbound.page_event_normalizer import PageEventNormalizer
from neattabs.infrastructure.logging.structured_runtime_logger import StructuredRuntimeLogger
from neattabs.navigation.services.group_actions_service import GroupActionsService
from neattabs.navigation.services.group_navigator import CycleCommand, GroupNavigator
from neattabs.navigation.services.window_overview_service import WindowOverviewService

PREFERENCE_KEYS = {"enabled", "exceptions", "sensitivity", "custom_colors", "customColors"}

app = FastAPI()

# Dependencies (Injected in real app)
session: GroupingSession = None  # type: ignore
overview_service: WindowOverviewService = None  # type: ignore
navigator: GroupNavigator = None  # type: ignore
actions: GroupActionsService = None  # type: ignore
normalizer = PageEventNormalizer()
security_service = BridgeSecurityService(settings.BRIDGE_SECRET_TOKEN)
runtime_logger = StructuredRuntimeLogger()
event_wait_timeout: float = settings.EVENT_WAIT_TIMEOUT_SECONDS


def setup_dependencies(
    grouping_session: GroupingSession,
    token: str,
    overview: Optional[WindowOverviewService] = None,
    cycle_navigator: Optional[GroupNavigator] = None,
    page_actions: Optional[GroupActionsService] = None,
    logger: Optional[StructuredRuntimeLogger] = None,
    wait_timeout: Optional[float] = None,
):
    global session, overview_service, navigator, actions
    global security_service, runtime_logger, event_wait_timeout
    session = grouping_session
    overview_service = overview or WindowOverviewService(grouping_session.host)
    navigator = cycle_navigator or GroupNavigator(grouping_session.host)
    actions = page_actions or GroupActionsService(grouping_session.host)
    security_service = BridgeSecurityService(token)
    runtime_logger = logger or StructuredRuntimeLogger()
    if wait_timeout is not None:
        event_wait_timeout = float(wait_timeout)


def verify_bridge_token(x_neattabs_bridge_token: Optional[str] = Header(None)) -> None:
    if not security_service.verify_token(x_neattabs_bridge_token or ""):
        raise HTTPException(status_code=403, detail="Invalid bridge token")


def _action_response(result: HostOperationResult) -> Dict[str, Any]:
    payload = result.to_payload()
    payload["success"] = result.ok
    return payload


def _handle_page_event(payload: Dict[str, Any], kind: PageEventKind) -> Dict[str, Any]:
    try:
        event = normalizer.normalize(payload, kind)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid page event: {e}")

    if event is None:
        runtime_logger.emit("BRIDGE_EVENT_IGNORED", kind=kind.value, status="ignored_no_address")
        return {"status": "ignored"}

    future = session.submit(event)
    try:
        outcome = future.result(timeout=event_wait_timeout)
    except FutureTimeoutError:
        runtime_logger.emit("BRIDGE_EVENT_QUEUED", page_id=event.page_id, window_id=event.window_id)
        return {"status": "queued"}
    except CancelledError:
        return {"status": "cancelled"}

    response = {"status": "ok"}
    response.update(outcome.to_payload())
    return response


# --- Tab events ---

@app.post("/events/page-created", dependencies=[Depends(verify_bridge_token)])
def page_created(payload: Dict[str, Any]):
    return _handle_page_event(payload, PageEventKind.CREATED)


@app.post("/events/page-updated", dependencies=[Depends(verify_bridge_token)])
def page_updated(payload: Dict[str, Any]):
    return _handle_page_event(payload, PageEventKind.ADDRESS_CHANGED)


@app.post("/events/window-removed", dependencies=[Depends(verify_bridge_token)])
def window_removed(payload: Dict[str, Any]):
    try:
        window_id = int(payload["window_id"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=400, detail="window_id is required")
    cancelled = session.on_window_closed(window_id)
    return {"status": "ok", "window_id": window_id, "cancelled_events": cancelled}


# --- Popup / commands ---

@app.get("/windows/{window_id}/overview", dependencies=[Depends(verify_bridge_token)])
def window_overview(window_id: int):
    try:
        return overview_service.snapshot(window_id).to_payload()
    except HostError as e:
        runtime_logger.warning("BRIDGE_HOST_FAILURE", route="overview", window_id=window_id, error=str(e))
        raise HTTPException(status_code=502, detail=f"Host error: {e}")


@app.post("/windows/{window_id}/commands/{command}", dependencies=[Depends(verify_bridge_token)])
def run_command(window_id: int, command: str):
    try:
        cycle = CycleCommand(command)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown command: {command}")
    try:
        page_id = navigator.cycle(window_id, cycle)
    except HostError as e:
        runtime_logger.warning("BRIDGE_HOST_FAILURE", route="command", window_id=window_id, error=str(e))
        raise HTTPException(status_code=502, detail=f"Host error: {e}")
    return {"status": "ok" if page_id is not None else "unchanged", "activated_page_id": page_id}


def _ids(payload: Dict[str, Any], key: str) -> List[int]:
    raw = payload[key]
    if not isinstance(raw, list):
        raw = [raw]
    return [int(item) for item in raw]


@app.post("/actions", dependencies=[Depends(verify_bridge_token)])
def run_action(payload: Dict[str, Any]):
    action = str(payload.get("action", ""))
    try:
        if action == "switchToTab":
            result = actions.switch_to_page(int(payload["tabId"]))
        elif action == "closeTab":
            result = actions.close_page(int(payload["tabId"]))
        elif action == "ungroupTabs":
            result = actions.ungroup_pages(_ids(payload, "tabIds"))
        elif action == "closeGroup":
            result = actions.close_pages(_ids(payload, "tabIds"))
        elif action == "updateGroupColor":
            result = actions.update_group_color(int(payload["groupId"]), str(payload["color"]))
        elif action == "ungroupPage":
            result = actions.ungroup_page(int(payload["windowId"]), int(payload["tabId"]))
        elif action == "closePageGroup":
            result = actions.close_page_group(int(payload["windowId"]), int(payload["tabId"]))
        else:
            raise HTTPException(status_code=400, detail=f"Unknown action: {action}")
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid {action} payload: {e}")

    if not result.ok:
        runtime_logger.warning("BRIDGE_ACTION_FAILED", action=action, reason=result.reason)
    return _action_response(result)


# --- Preferences ---

@app.get("/preferences", dependencies=[Depends(verify_bridge_token)])
def get_preferences():
    return session.preferences.current().to_payload()


@app.put("/preferences", dependencies=[Depends(verify_bridge_token)])
def put_preferences(payload: Dict[str, Any]):
    unknown = set(payload) - PREFERENCE_KEYS
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown preferences: {sorted(unknown)}")
    if "enabled" in payload and not isinstance(payload["enabled"], bool):
        raise HTTPException(status_code=400, detail="enabled must be true or false")
    changes = dict(payload)
    if "customColors" in changes:
        changes["custom_colors"] = changes.pop("customColors")
    updated = session.preferences.update(**changes)
    runtime_logger.emit("BRIDGE_PREFERENCES_UPDATED", keys=sorted(changes))
    return updated.to_payload()


def run_server(host=settings.BRIDGE_HOST, port=settings.BRIDGE_PORT):
    uvicorn.run(app, host=host, port=port)
