"""Tests de los handlers de comandos (toggle, eventos, refresh)."""
from datetime import timedelta

import pytest

from app.domain.badges.service import list_badges
from app.domain.checklist.service import AlreadyInitialized, list_items
from app.domain.onboarding import commands
from app.domain.store import RecordNotFound, StoreUnavailable
from app.models.license import License
from tests.factories import ACTING, NOW


def test_initialize_twice(store, make_agent):
    agent = make_agent()
    assert len(commands.initialize(store, agent.id)) == 10
    with pytest.raises(AlreadyInitialized):
        commands.initialize(store, agent.id)


def test_toggle_awards_quick_starter_once(store, make_agent):
    agent = make_agent(age_days=0.5)
    items = commands.initialize(store, agent.id)

    first = commands.toggle(store, items[0].id, ACTING, now=NOW)
    second = commands.toggle(store, items[1].id, ACTING, now=NOW)

    assert first.transitioned and first.item.is_completed
    assert [b.badge_type for b in first.badges_awarded] == ["quick_starter"]
    assert second.badges_awarded == []
    assert [b.badge_type for b in list_badges(store, agent.id)] == ["quick_starter"]


def test_uncomplete_keeps_badges(store, make_agent):
    agent = make_agent(age_days=0.5)
    item = commands.initialize(store, agent.id)[0]
    commands.toggle(store, item.id, ACTING, now=NOW)
    undone = commands.toggle(store, item.id, ACTING, now=NOW)
    assert undone.item.is_completed is False
    assert len(list_badges(store, agent.id)) == 1


def test_alert_failure_does_not_undo_toggle(store, make_agent, monkeypatch):
    agent = make_agent(age_days=30)
    items = commands.initialize(store, agent.id)

    def unavailable(model, values):
        raise StoreUnavailable("write timeout")

    monkeypatch.setattr(store, "create", unavailable)
    result = commands.toggle(store, items[0].id, ACTING, now=NOW)

    assert result.transitioned is True
    assert result.warnings
    assert list_items(store, agent.id)[0].is_completed is True


def test_toggle_unknown_item_fails_loudly(store):
    with pytest.raises(RecordNotFound):
        commands.toggle(store, 404, ACTING)


def test_toggle_store_down_fails_loudly(store, make_agent, monkeypatch):
    agent = make_agent()
    item = commands.initialize(store, agent.id)[0]

    def unavailable(model, record_id, patch):
        raise StoreUnavailable("connection refused")

    monkeypatch.setattr(store, "update", unavailable)
    with pytest.raises(StoreUnavailable):
        commands.toggle(store, item.id, ACTING)


def test_event_completes_items_and_awards(store, make_agent, db):
    agent = make_agent(age_days=3)
    commands.initialize(store, agent.id)
    db.add(License(agent_id=agent.id, state="TX", status="active", nipr_verified=True))
    db.commit()

    result = commands.apply_event(store, agent.id, "nipr_verified", ACTING, now=NOW)

    assert [i.item_key for i in result.completed_items] == ["state_license"]
    assert {"license_verified", "nipr_verified"} <= {b.badge_type for b in result.badges_awarded}


def test_event_for_unknown_agent(store):
    with pytest.raises(RecordNotFound):
        commands.apply_event(store, 77, "document_w9", ACTING)


def test_refresh_is_idempotent(store, make_agent):
    agent = make_agent(age_days=15, nipr_status="verified")
    commands.initialize(store, agent.id)

    first = commands.refresh(store, agent.id, now=NOW)
    second = commands.refresh(store, agent.id, now=NOW + timedelta(minutes=5))

    assert first.alerts_raised and [b.badge_type for b in first.badges_awarded] == ["nipr_verified"]
    assert second.alerts_raised == [] and second.badges_awarded == []
