import logging
from typing import Optional

from neattabs.grouping.domain.grouping_intent import GroupingAction, GroupingIntent
from neattabs.host.domain.host_errors import HostError
from neattabs.host.domain.host_operation_result import HostOperationResult
from neattabs.host.interfaces.browser_host import BrowserHost
from neattabs.host.services.result_normalizer import HostResultNormalizer

logger = logging.getLogger(__name__)


class IntentDispatcher:
    """
    Executes a GroupingIntent against the host.
    Never raises: host failures come back as a failed HostOperationResult.
    """

    def __init__(self, host: BrowserHost):
        self.host = host

    def dispatch(self, intent: GroupingIntent) -> HostOperationResult:
        if intent.action == GroupingAction.NO_OP:
            return HostResultNormalizer.success(effects=[])

        if not intent.page_ids:
            return HostResultNormalizer.rejection(reason=f"{intent.action.value} intent without pages")

        try:
            if intent.action == GroupingAction.JOIN_GROUP:
                return self._join(intent)
            return self._form(intent)
        except Exception as e:
            # Catch-all so one failed mutation never blocks later events
            return HostResultNormalizer.from_exception(e)

    def _join(self, intent: GroupingIntent) -> HostOperationResult:
        if intent.group_id is None:
            return HostResultNormalizer.rejection(reason="join_group intent without group id")
        group_id = self.host.group_pages(intent.page_ids, group_id=intent.group_id)
        return HostResultNormalizer.success(
            effects=["pages_grouped"],
            observations={"group_id": group_id, "page_ids": list(intent.page_ids)},
        )

    def _form(self, intent: GroupingIntent) -> HostOperationResult:
        if not intent.title or intent.color is None:
            return HostResultNormalizer.rejection(reason="form_group intent without title or color")

        group_id = self.host.group_pages(intent.page_ids)
        try:
            self.host.update_group(group_id, title=intent.title, color=intent.color.value)
        except HostError as e:
            rollback_error = self._rollback(intent, group_id)
            effects = ["group_created", "group_rolled_back"] if rollback_error is None else ["group_created"]
            reason = f"Group update failed: {e}"
            if rollback_error is not None:
                reason += f"; rollback failed: {rollback_error}"
            result = HostResultNormalizer.from_exception(e, effects=effects)
            return HostOperationResult(
                status=result.status,
                timestamp=result.timestamp,
                effects=result.effects,
                observations={"group_id": group_id},
                failure_type=result.failure_type,
                reason=reason,
            )

        return HostResultNormalizer.success(
            effects=["group_created", "group_updated"],
            observations={
                "group_id": group_id,
                "page_ids": list(intent.page_ids),
                "title": intent.title,
                "color": intent.color.value,
            },
        )

    def _rollback(self, intent: GroupingIntent, group_id: int) -> Optional[HostError]:
        # An untitled group must not be left behind
        try:
            self.host.ungroup_pages(intent.page_ids)
        except HostError as e:
            logger.warning(f"Rollback of group {group_id} failed: {e}")
            return e
        return None
