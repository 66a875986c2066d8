"""Tests del motor de reglas de insignias."""
from datetime import timedelta
from types import SimpleNamespace

from app.domain.badges.service import (
    BADGE_RULES,
    BadgeRule,
    evaluate_and_award,
    list_badges,
    satisfied_rules,
    total_points,
)
from app.domain.checklist.service import initialize_checklist
from app.domain.snapshot import assemble_snapshot
from app.domain.store import StoreUnavailable
from app.models.carrier_appointment import CarrierAppointment
from app.models.document import Document
from tests.factories import NOW, complete_items, fake_agent, fake_item, snapshot


def _types(rules):
    return {r.badge_type for r in rules}


class TestRuleTable:
    def test_canonical_points(self):
        points = {r.badge_type: r.points for r in BADGE_RULES}
        assert points == {
            "quick_starter": 50,
            "document_master": 100,
            "license_verified": 75,
            "nipr_verified": 100,
            "ahip_certified": 150,
            "compliance_champion": 100,
            "first_carrier": 125,
            "multi_carrier": 200,
            "speed_demon": 250,
            "onboarding_complete": 500,
        }

    def test_empty_snapshot_earns_nothing(self):
        assert satisfied_rules(snapshot()) == []


class TestPredicates:
    def test_quick_starter_uses_earliest_completion(self):
        agent = fake_agent(created_date=NOW)
        items = [
            fake_item("w9_form", True, NOW + timedelta(days=3)),
            fake_item("direct_deposit", True, NOW + timedelta(hours=20)),
        ]
        assert "quick_starter" in _types(satisfied_rules(snapshot(agent, items)))

    def test_quick_starter_too_late(self):
        agent = fake_agent(created_date=NOW)
        items = [fake_item("w9_form", True, NOW + timedelta(hours=25))]
        assert "quick_starter" not in _types(satisfied_rules(snapshot(agent, items)))

    def test_document_master_requires_all_four(self):
        partial = snapshot(documents=["w9", "direct_deposit", "eo_certificate"])
        full = snapshot(documents=["w9", "direct_deposit", "eo_certificate", "id_verification", "other"])
        assert "document_master" not in _types(satisfied_rules(partial))
        assert "document_master" in _types(satisfied_rules(full))

    def test_license_rules(self):
        pending = SimpleNamespace(status="pending", nipr_verified=True)
        active = SimpleNamespace(status="active", nipr_verified=True)
        earned_pending = _types(satisfied_rules(snapshot(licenses=[pending])))
        assert "nipr_verified" in earned_pending
        assert "license_verified" not in earned_pending
        assert "license_verified" in _types(satisfied_rules(snapshot(licenses=[active])))

    def test_nipr_verified_from_agent_status(self):
        agent = fake_agent(nipr_status="verified")
        assert "nipr_verified" in _types(satisfied_rules(snapshot(agent)))

    def test_ahip_from_checklist_or_agent(self):
        items = [fake_item("ahip_certification", True, NOW)]
        assert "ahip_certified" in _types(satisfied_rules(snapshot(items=items)))
        agent = fake_agent(ahip_completion_date=NOW.date())
        assert "ahip_certified" in _types(satisfied_rules(snapshot(agent)))

    def test_compliance_champion_needs_both_items(self):
        one = [fake_item("background_check", True, NOW), fake_item("compliance_training")]
        both = [fake_item("background_check", True, NOW), fake_item("compliance_training", True, NOW)]
        assert "compliance_champion" not in _types(satisfied_rules(snapshot(items=one)))
        assert "compliance_champion" in _types(satisfied_rules(snapshot(items=both)))
        passed = fake_agent(background_check_status="passed")
        assert "compliance_champion" in _types(satisfied_rules(snapshot(passed)))

    def test_no_appointments_no_carrier_badges(self):
        earned = _types(satisfied_rules(snapshot(appointments=[])))
        assert "first_carrier" not in earned
        assert "multi_carrier" not in earned

    def test_carrier_badges_count_only_appointed(self):
        two = snapshot(appointments=["appointed", "appointed", "pending", "terminated"])
        three = snapshot(appointments=["appointed"] * 3)
        assert _types(satisfied_rules(two)) & {"first_carrier", "multi_carrier"} == {"first_carrier"}
        assert {"first_carrier", "multi_carrier"} <= _types(satisfied_rules(three))

    def test_completion_badges_need_ready_to_sell(self):
        items = [fake_item(f"item_{n}", True, NOW - timedelta(days=1)) for n in range(3)]
        in_progress = fake_agent(created_date=NOW - timedelta(days=3))
        ready = fake_agent(created_date=NOW - timedelta(days=3), onboarding_status="ready_to_sell")
        assert not _types(satisfied_rules(snapshot(in_progress, items))) & {"speed_demon", "onboarding_complete"}
        assert {"speed_demon", "onboarding_complete"} <= _types(satisfied_rules(snapshot(ready, items)))

    def test_speed_demon_over_seven_days(self):
        agent = fake_agent(created_date=NOW - timedelta(days=20), onboarding_status="ready_to_sell")
        items = [fake_item("w9_form", True, NOW - timedelta(days=5))]
        earned = _types(satisfied_rules(snapshot(agent, items)))
        assert "speed_demon" not in earned
        assert "onboarding_complete" in earned

    def test_onboarding_complete_needs_items(self):
        agent = fake_agent(onboarding_status="ready_to_sell")
        assert "onboarding_complete" not in _types(satisfied_rules(snapshot(agent, [])))


class TestIsolation:
    def test_failing_rule_is_skipped(self):
        def boom(snap, earned):
            raise ValueError("bad data")

        rules = (
            BadgeRule("broken", "Broken", "", 10, boom),
            BadgeRule("always", "Always", "", 5, lambda snap, earned: True),
        )
        assert _types(satisfied_rules(snapshot(), rules=rules)) == {"always"}

    def test_earned_rules_are_not_evaluated(self):
        calls = []

        def tracked(snap, earned):
            calls.append(1)
            return True

        rules = (BadgeRule("tracked", "Tracked", "", 1, tracked),)
        assert satisfied_rules(snapshot(), earned={"tracked"}, rules=rules) == []
        assert calls == []


class TestEvaluateAndAward:
    def _ready_agent(self, store, make_agent):
        agent = make_agent(age_days=10, onboarding_status="ready_to_sell")
        items = initialize_checklist(store, agent.id)
        complete_items(store, items, agent.created_date + timedelta(days=5))
        return agent

    def test_speed_demon_and_onboarding_complete_same_pass(self, store, make_agent):
        agent = self._ready_agent(store, make_agent)
        awarded = evaluate_and_award(store, agent.id, assemble_snapshot(store, agent.id), [], now=NOW)
        types = {b.badge_type for b in awarded}
        assert {"speed_demon", "onboarding_complete", "ahip_certified", "compliance_champion"} <= types
        assert "quick_starter" not in types

    def test_second_pass_awards_nothing(self, store, make_agent):
        agent = self._ready_agent(store, make_agent)
        first = evaluate_and_award(store, agent.id, assemble_snapshot(store, agent.id), [], now=NOW)
        existing = list_badges(store, agent.id)
        second = evaluate_and_award(store, agent.id, assemble_snapshot(store, agent.id), existing, now=NOW)
        assert first and second == []
        assert len(list_badges(store, agent.id)) == len(first)

    def test_race_with_stale_badge_list_is_not_an_error(self, store, make_agent):
        agent = self._ready_agent(store, make_agent)
        snap = assemble_snapshot(store, agent.id)
        first = evaluate_and_award(store, agent.id, snap, [], now=NOW)
        # otra pasada concurrente que todavía no vio las insignias recién creadas
        racing = evaluate_and_award(store, agent.id, assemble_snapshot(store, agent.id), [], now=NOW)
        assert racing == []
        badges = list_badges(store, agent.id)
        assert len(badges) == len(first)
        assert len({b.badge_type for b in badges}) == len(badges)

    def test_appointments_and_documents_from_store(self, store, make_agent, db):
        agent = make_agent()
        for doc_type in ("w9", "direct_deposit", "eo_certificate", "id_verification"):
            db.add(Document(agent_id=agent.id, document_type=doc_type))
        db.add(CarrierAppointment(agent_id=agent.id, carrier_name="Acme Health", appointment_status="appointed"))
        db.commit()

        awarded = evaluate_and_award(store, agent.id, assemble_snapshot(store, agent.id), [], now=NOW)
        assert {b.badge_type for b in awarded} == {"document_master", "first_carrier"}
        assert total_points(list_badges(store, agent.id)) == 225

    def test_store_failure_on_create_is_soft(self, store, make_agent, monkeypatch):
        agent = make_agent(nipr_status="verified")
        snap = assemble_snapshot(store, agent.id)

        def unavailable(model, values):
            raise StoreUnavailable("connection reset")

        monkeypatch.setattr(store, "create", unavailable)
        assert evaluate_and_award(store, agent.id, snap, [], now=NOW) == []


def test_total_points_is_sum_of_badge_points():
    badges = [SimpleNamespace(points=50), SimpleNamespace(points=100), SimpleNamespace(points=None)]
    assert total_points(badges) == 150
