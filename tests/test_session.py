"""
Tests for proof sessions: recording, editing, completion and persistence.
"""

import json

import pytest

from eqproof.session import (
    Problem, ProofSession, ProofStep, load_problems, ERR_NO_EXPRESSION, ERR_NO_RULE,
)
from eqproof.theories import make_theory


BOOLEAN_PROBLEM = {
    "week": 2, "number": 1, "theory": "bool_alg",
    "name": "Simplify", "LHS": "x ∧ (x' ∨ y)", "RHS": "x ∧ y",
    "hints": ["Distribute first"],
}

BOOLEAN_PROOF = [
    ("(x ∧ x') ∨ (x ∧ y)", "dist_and_or"),
    ("0 ∨ (x ∧ y)", "comp_and"),
    ("(x ∧ y) ∨ 0", "comm_or"),
    ("x ∧ y", "id_or"),
]


def boolean_session(**overrides):
    problem = Problem.from_dict(dict(BOOLEAN_PROBLEM, **overrides))
    return ProofSession(problem, theory=make_theory("bool_alg"))


def set_session(lhs="A ∪ A", rhs="A", **kwargs):
    problem = Problem(theory="set_theory", lhs=lhs, rhs=rhs, **kwargs)
    return ProofSession(problem, theory=make_theory("set_theory"))


# ── Problems ────────────────────────────────────────────────────────────────

class TestProblem:
    def test_problem_id(self):
        assert Problem.from_dict(BOOLEAN_PROBLEM).problem_id == "2.1"

    def test_problem_id_without_week(self):
        assert Problem("set_theory", "A", "A", name="Warmup").problem_id == "Warmup"

    def test_missing_keys(self):
        with pytest.raises(ValueError, match="missing 'RHS'"):
            Problem.from_dict({"theory": "set_theory", "LHS": "A"})

    def test_dict_round_trip(self):
        d = dict(BOOLEAN_PROBLEM, enabledRules=["comm"], description="")
        assert Problem.from_dict(d).to_dict() == d

    def test_custom_equation(self):
        p = Problem.custom_equation("set_theory", "A ∪ A", "A")
        assert p.name == "Custom equation"
        assert p.enabled_rules is None

    def test_load_problems_shapes(self, tmp_path):
        assert len(load_problems([BOOLEAN_PROBLEM])) == 1
        assert len(load_problems({"problems": [BOOLEAN_PROBLEM] * 2})) == 2
        path = tmp_path / "problems.json"
        path.write_text(json.dumps({"problems": [BOOLEAN_PROBLEM]}), encoding="utf-8")
        assert load_problems(str(path))[0].hints == ["Distribute first"]

    def test_load_problems_rejects_other_json(self):
        with pytest.raises(ValueError, match="Expected a list of problems"):
            load_problems({"problems": "none"})


# ── Steps ───────────────────────────────────────────────────────────────────

class TestSteps:
    def test_full_proof(self):
        session = boolean_session()
        for expression, rule in BOOLEAN_PROOF:
            result = session.check_step(expression, rule)
            assert result.success, (expression, rule, result.error)
        assert session.is_complete()
        assert [s.rule.name for s in session.steps] == [r for _, r in BOOLEAN_PROOF]

    def test_not_complete_midway(self):
        session = boolean_session()
        session.check_step(*BOOLEAN_PROOF[0])
        assert not session.is_complete()
        assert not boolean_session().is_complete()

    def test_rejected_step_is_not_recorded(self):
        session = set_session()
        result = session.check_step("B", "idem1")
        assert not result.success
        assert session.steps == []
        assert session.current_expression() == "A ∪ A"

    def test_expression_is_stored_canonically(self):
        session = set_session()
        session.check_step("  A ", "idem1")
        session.check_step("A∪A", "idem1")
        assert session.current_expression() == "A ∪ A"

    def test_empty_expression(self):
        assert set_session().check_step("   ", "idem1").error == ERR_NO_EXPRESSION

    def test_no_rule(self):
        assert set_session().check_step("A", "").error == ERR_NO_RULE

    def test_unknown_rule(self):
        assert set_session().check_step("A", "idem7").error == "Unknown rule: idem7"

    def test_parse_error_in_step(self):
        result = set_session().check_step("A ∪", "idem1")
        assert result.error == "Error in expression: Unable to parse expression"

    def test_edit_truncates(self):
        session = boolean_session()
        for expression, rule in BOOLEAN_PROOF[:3]:
            session.check_step(expression, rule)
        result = session.check_step("x ∧ (y ∨ x')", "comm_or", edit_index=0)
        assert result.success
        assert len(session.steps) == 1
        assert session.current_expression() == "x ∧ (y ∨ x')"

    def test_rejected_edit_keeps_steps(self):
        session = boolean_session()
        for expression, rule in BOOLEAN_PROOF[:2]:
            session.check_step(expression, rule)
        assert not session.check_step("x", "comm_or", edit_index=1).success
        assert len(session.steps) == 2

    def test_edit_out_of_range(self):
        with pytest.raises(IndexError):
            set_session().check_step("A", "idem1", edit_index=0)

    def test_delete_step(self):
        session = boolean_session()
        for expression, rule in BOOLEAN_PROOF:
            session.check_step(expression, rule)
        session.delete_step(2)
        assert len(session.steps) == 2
        assert session.current_expression() == "0 ∨ (x ∧ y)"
        with pytest.raises(IndexError):
            session.delete_step(5)

    def test_restart(self):
        session = set_session()
        session.check_step("A", "idem1")
        session.restart()
        assert session.steps == []

    def test_expression_before(self):
        session = set_session()
        session.check_step("A", "idem1")
        assert session.expression_before(0) == "A ∪ A"
        assert session.expression_before(1) == "A"
        with pytest.raises(IndexError):
            session.expression_before(2)

    def test_bad_problem(self):
        with pytest.raises(ValueError, match="Error in RHS"):
            set_session(rhs="A ∪")

    def test_verbose(self, capsys):
        problem = Problem("set_theory", "A ∪ A", "A")
        session = ProofSession(problem, theory=make_theory("set_theory"), verbose=True)
        session.check_step("B", "idem1")
        session.check_step("A", "idem1")
        out = capsys.readouterr().out
        assert "[rejected] B (idem1)" in out
        assert "[step 1] A  (Idempotence of Union)" in out


# ── Rule filtering ──────────────────────────────────────────────────────────

class TestRuleFiltering:
    def test_enabled_rules(self):
        session = set_session(enabled_rules=["comm1"])
        assert session.is_rule_enabled("comm1")
        assert not session.is_rule_enabled("idem1")
        result = session.check_step("A", "idem1")
        assert result.error == "Rule not enabled for this problem: idem1"

    def test_enabled_by_prefix(self):
        session = boolean_session(enabledRules=["dist", "comp"])
        assert session.is_rule_enabled("dist_and_or")
        assert session.is_rule_enabled("comp_and")
        assert not session.is_rule_enabled("comm_or")

    def test_disabled_rules(self):
        session = set_session(disabled_rules=["idem1"])
        assert not session.is_rule_enabled("idem1")
        assert session.is_rule_enabled("idem2")

    def test_enabled_wins_over_disabled(self):
        session = set_session(enabled_rules=["idem1"], disabled_rules=["idem1"])
        assert session.is_rule_enabled("idem1")

    def test_problem_laws_always_enabled(self):
        problem = Problem(
            theory="set_theory", lhs="A ∪ (A ∩ B)", rhs="A", week=3, number=2,
            enabled_rules=["comm1"],
            custom_laws=[{"name": "Absorption", "lhs": "x ∪ (x ∩ y)", "rhs": "x"}],
        )
        session = ProofSession(problem, theory=make_theory("set_theory"))
        assert session.is_rule_enabled("custom_3.2_absorption")
        assert session.check_step("A", "custom_3.2_absorption").success
        assert session.is_complete()

    def test_available_rules(self):
        session = set_session(enabled_rules=["comm1", "comm2"])
        assert [r.name for r in session.available_rules()] == ["comm1", "comm2"]

    def test_new_session_clears_previous_problem(self):
        theory = make_theory("set_theory")
        ProofSession(Problem("set_theory", "A", "A", week=1, number=1,
                             custom_laws=[{"name": "Mine", "lhs": "x", "rhs": "x ∪ x"}]),
                     theory=theory)
        ProofSession(Problem("set_theory", "A", "A"), theory=theory)
        assert theory.current_problem_id is None
        assert theory.get_compiled_rule("custom_1.1_mine") is None


class TestSharedTheory:
    SWAP = [{"name": "Swap", "lhs": "x \\ y", "rhs": "y \\ x"}]

    def sessions(self):
        theory = make_theory("set_theory")
        first = ProofSession(Problem("set_theory", "A \\ B", "B \\ A", week=1, number=1,
                                     custom_laws=self.SWAP), theory=theory)
        second = ProofSession(Problem("set_theory", "A ∪ A", "A", week=1, number=2),
                              theory=theory)
        return theory, first, second

    def test_earlier_session_keeps_its_laws(self):
        theory, first, second = self.sessions()
        result = first.check_step("B \\ A", "custom_1.1_swap")
        assert result.success, result.error
        assert first.is_complete()
        assert theory.current_problem_id == "1.1"

    def test_later_session_drops_them_again(self):
        theory, first, second = self.sessions()
        first.check_step("B \\ A", "custom_1.1_swap")
        assert second.check_step("A", "custom_1.1_swap").error == "Unknown rule: custom_1.1_swap"
        assert theory.current_problem_id is None
        assert second.check_step("A", "idem1").success

    def test_interleaved_edits(self):
        theory, first, second = self.sessions()
        first.check_step("B \\ A", "custom_1.1_swap")
        second.check_step("A", "idem1")
        assert first.check_step("A \\ B", "custom_1.1_swap").success
        second.restart()
        second.check_step("A", "idem1")
        result = first.check_step("B ∩ Aᶜ", "defdiff", edit_index=1)
        assert result.success, result.error
        second.check_step("A ∪ A", "idem1")
        result = first.check_step("A \\ B", "custom_1.1_swap", edit_index=1)
        assert result.success, result.error
        assert [s.expression for s in first.steps] == ["B \\ A", "A \\ B"]

    def test_rule_listings_follow_the_session(self):
        theory, first, second = self.sessions()
        assert "custom_1.1_swap" not in [r.name for r in second.available_rules()]
        assert "custom_1.1_swap" in [r.name for r in first.available_rules()]
        second.available_rules()
        assert first.is_rule_enabled("custom_1.1_swap")


# ── Persistence ─────────────────────────────────────────────────────────────

class TestPersistence:
    def test_to_dict(self):
        session = set_session()
        session.check_step("A", "idem1")
        d = session.to_dict()
        assert d["theory"] == "set_theory"
        assert d["steps"] == [{"expression": "A", "rule": "idem1"}]

    def test_step_to_dict(self):
        session = set_session()
        session.check_step("A", "idem1")
        assert isinstance(session.steps[0], ProofStep)
        assert session.steps[0].to_dict()["rule"] == "idem1"

    def test_save_and_load(self, tmp_path):
        session = boolean_session()
        for expression, rule in BOOLEAN_PROOF:
            session.check_step(expression, rule)
        path = tmp_path / "session.json"
        session.save(str(path))

        assert "∧" in path.read_text(encoding="utf-8")
        restored = ProofSession.load(str(path), theory=make_theory("bool_alg"))
        assert restored.is_complete()
        assert [s.expression for s in restored.steps] == [s.expression for s in session.steps]

    def test_stale_step(self):
        d = set_session().to_dict()
        d["steps"] = [{"expression": "B", "rule": "idem1"}]
        with pytest.raises(ValueError, match="Saved step 1 no longer checks"):
            ProofSession.from_dict(d, theory=make_theory("set_theory"))
