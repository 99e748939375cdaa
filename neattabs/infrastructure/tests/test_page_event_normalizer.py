import pytest

from neattabs.grouping.domain.page_event import PageEventKind
from neattabs.infrastructure.inbound.bridge_security import BridgeSecurityService
from neattabs.infrastructure.inbound.page_event_normalizer import PageEventNormalizer


def test_normalizes_nested_tab_payload():
    event = PageEventNormalizer().normalize(
        {"tab": {"id": "12", "windowId": 3, "url": "https://github.com/"}},
        PageEventKind.CREATED,
    )

    assert event.page_id == 12
    assert event.window_id == 3
    assert event.address == "https://github.com/"
    assert event.kind == PageEventKind.CREATED


def test_normalizes_flat_payload():
    event = PageEventNormalizer().normalize(
        {"page_id": 1, "window_id": 2, "address": "https://x.com/"},
        PageEventKind.CREATED,
    )

    assert (event.page_id, event.window_id, event.address) == (1, 2, "https://x.com/")


def test_address_change_prefers_change_info_url():
    event = PageEventNormalizer().normalize(
        {
            "tab": {"id": 1, "windowId": 1, "url": "https://old.test/"},
            "changeInfo": {"url": "https://new.test/"},
        },
        PageEventKind.ADDRESS_CHANGED,
    )

    assert event.address == "https://new.test/"
    assert event.kind == PageEventKind.ADDRESS_CHANGED


@pytest.mark.parametrize(
    "payload, kind",
    [
        ({"tab": {"id": 1, "windowId": 1}}, PageEventKind.CREATED),
        ({"tab": {"id": 1, "windowId": 1, "url": ""}}, PageEventKind.CREATED),
        ({"tab": {"id": 1, "windowId": 1, "url": "https://a.test/"}, "changeInfo": {"title": "A"}},
         PageEventKind.ADDRESS_CHANGED),
    ],
)
def test_events_without_address_are_ignored(payload, kind):
    assert PageEventNormalizer().normalize(payload, kind) is None


def test_missing_ids_raise_value_error():
    with pytest.raises(ValueError):
        PageEventNormalizer().normalize({"url": "https://a.test/"}, PageEventKind.CREATED)


def test_bridge_security_token_check():
    security = BridgeSecurityService("s3cret")

    assert security.verify_token("s3cret")
    assert not security.verify_token("S3CRET")
    assert not security.verify_token(None)
    assert not BridgeSecurityService("").verify_token("")
