"""
Proof sessions: one problem, one theory, a growing list of checked steps.

A problem asks for a proof that LHS = RHS. The session starts from LHS;
each step proposes a new expression and names the law that justifies
it. A step is recorded only if the theory accepts it, so the step list
is always a valid chain. The proof is complete once the last expression
is structurally equal to RHS.

Problems come from the same JSON shape the course problem sets use:

    {"week": 3, "number": 2, "theory": "set_theory",
     "name": "...", "LHS": "(A ∪ B) ∩ A", "RHS": "A",
     "enabledRules": ["comm1", "dist1"],
     "customLaws": [{"name": "Absorption", "lhs": "...", "rhs": "..."}]}

A problem's custom laws are loaded into the theory when the session
starts, keyed by the problem id "<week>.<number>".
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .core.ast import equals
from .theories import get_theory
from .theories.theory import Theory, RuleDefinition, StepResult


ERR_NO_EXPRESSION = "Please enter an expression"
ERR_NO_RULE = "Please select a rule"


@dataclass
class Problem:
    theory: str
    lhs: str
    rhs: str
    name: str = ""
    description: str = ""
    week: Optional[int] = None
    number: Optional[int] = None
    hints: list = field(default_factory=list)
    enabled_rules: Optional[list] = None
    disabled_rules: Optional[list] = None
    custom_laws: list = field(default_factory=list)

    @property
    def problem_id(self) -> str:
        if self.week is not None and self.number is not None:
            return f"{self.week}.{self.number}"
        return self.name or f"{self.lhs} = {self.rhs}"

    @classmethod
    def from_dict(cls, d: dict) -> "Problem":
        for key in ("theory", "LHS", "RHS"):
            if key not in d:
                raise ValueError(f"Problem {d.get('name', '?')!r} is missing {key!r}")
        return cls(
            theory=d["theory"],
            lhs=d["LHS"],
            rhs=d["RHS"],
            name=d.get("name", ""),
            description=d.get("description", ""),
            week=d.get("week"),
            number=d.get("number"),
            hints=list(d.get("hints", [])),
            enabled_rules=d.get("enabledRules"),
            disabled_rules=d.get("disabledRules"),
            custom_laws=list(d.get("customLaws", [])),
        )

    def to_dict(self) -> dict:
        d = {"theory": self.theory, "name": self.name,
             "description": self.description,
             "LHS": self.lhs, "RHS": self.rhs}
        if self.week is not None:
            d["week"] = self.week
        if self.number is not None:
            d["number"] = self.number
        if self.hints:
            d["hints"] = list(self.hints)
        if self.enabled_rules is not None:
            d["enabledRules"] = list(self.enabled_rules)
        if self.disabled_rules is not None:
            d["disabledRules"] = list(self.disabled_rules)
        if self.custom_laws:
            d["customLaws"] = list(self.custom_laws)
        return d

    @classmethod
    def custom_equation(cls, theory: str, lhs: str, rhs: str) -> "Problem":
        """An ad hoc problem for a user-supplied equation, all laws enabled."""
        return cls(theory=theory, lhs=lhs, rhs=rhs, name="Custom equation",
                   description="Prove the following equation")


def load_problems(source) -> list:
    """
    Problems from a JSON file path, a dict with a "problems" list, or a
    plain list of problem dicts.
    """
    if isinstance(source, (str, Path)):
        with open(source, encoding="utf-8") as f:
            source = json.load(f)
    if isinstance(source, dict):
        source = source.get("problems", [])
    if not isinstance(source, list):
        raise ValueError(f"Expected a list of problems, got {type(source).__name__}")
    return [Problem.from_dict(p) for p in source]


@dataclass
class ProofStep:
    expression: str
    rule: RuleDefinition

    def to_dict(self) -> dict:
        return {"expression": self.expression, "rule": self.rule.name}


class ProofSession:
    """
    An in-progress proof of one problem.

    Starting a session clears the theory's previous problem context and
    activates this problem's custom laws, so only one problem's laws are
    live at a time. Sessions can share a theory: each one switches the
    theory back to its own problem before looking up or checking rules.
    """

    def __init__(self, problem: Problem, theory: Optional[Theory] = None, verbose=False):
        self.problem = problem
        self.theory = theory if theory is not None else get_theory(problem.theory)
        self.verbose = verbose
        self.steps = []

        for side, expr in (("LHS", problem.lhs), ("RHS", problem.rhs)):
            _, err = self.theory.parse_expression(expr)
            if err:
                raise ValueError(f"Error in {side} of {problem.problem_id!r}: {err}")

        self.theory.clear_problem_context()
        if problem.custom_laws:
            self.theory.load_problem_custom_laws(problem.problem_id, problem.custom_laws)

    def __repr__(self):
        return f"ProofSession({self.problem.problem_id!r}, steps={len(self.steps)})"

    def _activate_problem(self):
        """Point the theory at this problem again if another session moved it."""
        if self.problem.custom_laws:
            if self.theory.current_problem_id != self.problem.problem_id:
                self.theory.load_problem_custom_laws(self.problem.problem_id,
                                                     self.problem.custom_laws)
        elif self.theory.current_problem_id is not None:
            self.theory.clear_problem_context()

    # ── Rules ────────────────────────────────────────────────────────────────

    def is_rule_enabled(self, rule_name: str) -> bool:
        """
        Problem-specific laws are always offered. Otherwise a rule must be
        listed in enabled_rules (by full name or by the part before the
        first "_") or, failing an allow-list, not be in disabled_rules.
        """
        self._activate_problem()
        compiled = self.theory.get_compiled_rule(rule_name)
        if compiled is not None and compiled.is_problem_specific:
            return True
        enabled = self.problem.enabled_rules
        if enabled is not None:
            return rule_name in enabled or rule_name.split("_")[0] in enabled
        disabled = self.problem.disabled_rules
        if disabled is not None:
            return rule_name not in disabled
        return True

    def available_rules(self) -> list:
        self._activate_problem()
        return [r for r in self.theory.get_all_available_rules()
                if self.is_rule_enabled(r.name)]

    # ── Steps ────────────────────────────────────────────────────────────────

    def current_expression(self) -> str:
        return self.steps[-1].expression if self.steps else self.problem.lhs

    def expression_before(self, index: int) -> str:
        """The expression step `index` rewrites."""
        if index < 0 or index > len(self.steps):
            raise IndexError(f"No step {index} (proof has {len(self.steps)} steps)")
        return self.steps[index - 1].expression if index > 0 else self.problem.lhs

    def check_step(self, expression: str, rule_name: str,
                   edit_index: Optional[int] = None) -> StepResult:
        """
        Validate and record a step.

        With edit_index, the step at that position is replaced and every
        later step is discarded. Rejected steps leave the session unchanged.
        """
        expression = re.sub(r"\s", "", expression or "")
        if not expression:
            return StepResult(False, ERR_NO_EXPRESSION)
        if not rule_name:
            return StepResult(False, ERR_NO_RULE)

        self._activate_problem()

        if edit_index is not None and edit_index >= len(self.steps):
            raise IndexError(f"No step {edit_index} to edit (proof has {len(self.steps)} steps)")
        index = len(self.steps) if edit_index is None else edit_index
        previous = self.expression_before(index)

        if self.theory.get_compiled_rule(rule_name) is not None and not self.is_rule_enabled(rule_name):
            return StepResult(False, f"Rule not enabled for this problem: {rule_name}")

        result = self.theory.validate_expressions(previous, expression, rule_name)
        if not result.success:
            if self.verbose:
                print(f"  [rejected] {expression} ({rule_name}): {result.error}")
            return result

        to_ast, _ = self.theory.parse_expression(expression)
        step = ProofStep(self.theory.parser.format(to_ast), result.rule)
        if edit_index is None:
            self.steps.append(step)
        else:
            self.steps[edit_index] = step
            del self.steps[edit_index + 1:]

        if self.verbose:
            print(f"  [step {index + 1}] {step.expression}  ({step.rule.text})")
        return result

    def delete_step(self, index: int):
        """Remove step `index` and everything after it."""
        if index < 0 or index >= len(self.steps):
            raise IndexError(f"No step {index} (proof has {len(self.steps)} steps)")
        del self.steps[index:]

    def restart(self):
        self.steps = []

    def is_complete(self) -> bool:
        if not self.steps:
            return False
        final, _ = self.theory.parse_expression(self.steps[-1].expression)
        target, _ = self.theory.parse_expression(self.problem.rhs)
        return equals(final, target)

    # ── Persistence ──────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "theory": self.theory.name,
            "problem": self.problem.to_dict(),
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, d: dict, theory: Optional[Theory] = None) -> "ProofSession":
        """Rebuild a session by re-checking every saved step."""
        problem = Problem.from_dict(d["problem"])
        session = cls(problem, theory=theory)
        for i, step in enumerate(d.get("steps", [])):
            result = session.check_step(step["expression"], step["rule"])
            if not result.success:
                raise ValueError(f"Saved step {i + 1} no longer checks: {result.error}")
        return session

    def save(self, path="proof_session.json"):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path="proof_session.json", theory: Optional[Theory] = None):
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f), theory=theory)
