"""
Tests for the command-line interface (python -m eqproof).
"""

import json

import pytest

from eqproof.__main__ import main


def write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


class TestListing:
    def test_theories(self, capsys):
        assert main(["theories"]) == 0
        out = capsys.readouterr().out
        assert "set_theory" in out
        assert "Propositional Logic" in out

    def test_rules(self, capsys):
        assert main(["rules", "--theory", "set_theory"]) == 0
        out = capsys.readouterr().out
        assert "definitions:" in out
        assert "idem1" in out

    def test_unknown_theory(self):
        with pytest.raises(SystemExit) as exc:
            main(["rules", "--theory", "groups"])
        assert exc.value.code == 2


class TestParseAndCheck:
    def test_parse_latex(self, capsys):
        assert main(["parse", "--theory", "prop_logic", "--format", "latex", "¬(p ∨ q)"]) == 0
        assert capsys.readouterr().out.strip() == "\\neg (p \\lor q)"

    def test_parse_error(self, capsys):
        assert main(["parse", "--theory", "set_theory", "A ∩ (B"]) == 1
        assert "Unmatched '('" in capsys.readouterr().err

    def test_check_ok(self, capsys):
        assert main(["check", "--theory", "set_theory", "A ∪ A", "A", "idem1"]) == 0
        assert "OK: Idempotence of Union" in capsys.readouterr().out

    def test_check_rejected(self, capsys):
        assert main(["check", "--theory", "set_theory", "(A∪A)∩(B∪B)", "A∩B", "idem1"]) == 1
        assert "Too many changes" in capsys.readouterr().err


class TestProve:
    SCRIPT = {
        "theory": "set_theory",
        "LHS": "A ∪ (A ∩ B)",
        "RHS": "A",
        "steps": [
            {"expression": "(A ∪ A) ∩ (A ∪ B)", "rule": "dist2"},
            {"expression": "A ∩ (A ∪ B)", "rule": "idem1"},
            {"expression": "A", "rule": "abs2"},
        ],
    }

    def test_complete_proof(self, tmp_path, capsys):
        path = write_json(tmp_path / "proof.json", self.SCRIPT)
        assert main(["prove", path, "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "(Absorption law 2)" in out

    def test_markdown_and_save(self, tmp_path, capsys):
        path = write_json(tmp_path / "proof.json", self.SCRIPT)
        saved = tmp_path / "saved.json"
        assert main(["prove", path, "--format", "markdown", "--save", str(saved)]) == 0
        assert "| Expression | Rule |" in capsys.readouterr().out
        data = json.loads(saved.read_text(encoding="utf-8"))
        assert [s["rule"] for s in data["steps"]] == ["dist2", "idem1", "abs2"]

    def test_incomplete_proof(self, tmp_path, capsys):
        script = dict(self.SCRIPT, steps=self.SCRIPT["steps"][:1])
        path = write_json(tmp_path / "proof.json", script)
        assert main(["prove", path]) == 1
        assert "Incomplete" in capsys.readouterr().out

    def test_rejected_step(self, tmp_path, capsys):
        script = dict(self.SCRIPT, steps=[{"expression": "B", "rule": "idem1"}])
        path = write_json(tmp_path / "proof.json", script)
        assert main(["prove", path, "--quiet"]) == 1
        assert "Step 1 rejected" in capsys.readouterr().err

    def test_problem_with_custom_law(self, tmp_path, capsys):
        script = {
            "problem": {
                "week": 3, "number": 2, "theory": "set_theory",
                "LHS": "A ∪ (A ∩ B)", "RHS": "A",
                "customLaws": [{"name": "Absorption", "lhs": "x ∪ (x ∩ y)", "rhs": "x"}],
            },
            "steps": [{"expression": "A", "rule": "custom_3.2_absorption"}],
        }
        path = write_json(tmp_path / "proof.json", script)
        assert main(["prove", path, "--quiet"]) == 0


class TestProblems:
    def test_problem_set(self, tmp_path, capsys):
        path = write_json(tmp_path / "problems.json", {"problems": [
            {"week": 1, "number": 1, "theory": "set_theory", "name": "Good",
             "LHS": "A ∪ A", "RHS": "A"},
            {"week": 1, "number": 2, "theory": "set_theory", "name": "Bad",
             "LHS": "A ∪", "RHS": "A"},
        ]})
        assert main(["problems", path]) == 1
        out = capsys.readouterr().out
        assert "[ok]" in out
        assert "error: Error in LHS of '1.2'" in out
