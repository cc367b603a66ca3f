import json
import logging

from member_grid.app.config import load_settings
from member_grid.app.infrastructure.logging.logger import get_logger, log_action
from member_grid.app.main import build_grid


class CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def test_log_action_contains_required_fields() -> None:
    logger = logging.getLogger("member_grid.test.obs")
    logger.handlers = []
    logger.setLevel(logging.INFO)
    handler = CaptureHandler()
    logger.addHandler(handler)

    log_action(
        logger=logger,
        module="member_grid",
        action="RecordRemoved",
        record_id="u1",
        page=2,
        outcome="applied",
        visible_total=19,
    )

    assert len(handler.messages) == 1
    payload = json.loads(handler.messages[0])
    for key in ["ts", "level", "module", "action", "record_id", "page", "outcome"]:
        assert key in payload
    assert payload["visible_total"] == 19


def test_get_logger_installs_single_handler() -> None:
    first = get_logger("member_grid.test.single")
    second = get_logger("member_grid.test.single")

    assert first is second
    assert len(second.handlers) == 1


def test_grid_logs_never_include_api_token(monkeypatch) -> None:
    monkeypatch.setenv("MEMBER_GRID_API_TOKEN", "very-secret-token")
    monkeypatch.setenv("MEMBER_GRID_CONTAINER_ID", "team-1")

    handler = CaptureHandler()
    logger = logging.getLogger("member_grid")
    logger.addHandler(handler)
    previous_level = logger.level
    logger.setLevel(logging.INFO)
    try:
        grid, source = build_grid(load_settings(".missing-env"), client=_OneMemberClient())
        source.load_page(0)
        grid.render()
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

    assert handler.messages
    assert all("very-secret-token" not in message for message in handler.messages)


class _OneMemberClient:
    def list_members(self, page, per_page):
        return {"rows": [{"id": "u1"}], "page": page, "page_size": per_page, "total": 1}

    def get_memberships(self, user_ids):
        return [{"user_id": user_id, "team_id": "team-1", "roles": "team_user"} for user_id in user_ids]
