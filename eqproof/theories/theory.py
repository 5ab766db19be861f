"""
Theories: a signature, its laws, and a parser that reads both.

Each Theory owns its own SymbolTable and ExpressionParser. Nothing is
shared between theories, so switching from set theory to propositional
logic cannot change how either one parses.

Laws are compiled lazily into (lhs_pattern, rhs_pattern) pairs. The
compiled set lives in a RuleCache, a frozen value with three states:

    UNCOMPILED                       nothing parsed yet
    compiled, problem_id=None        built-in laws only
    compiled, problem_id=P           built-ins plus problem P's custom laws

load_problem() and clear_problem() move between them and always leave
the cache uncompiled; the Theory recompiles straight away. At most one
problem's custom laws are ever compiled.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from ..core.ast import Node, is_valid_node
from ..core.parser import ExpressionParser
from ..core.rewrite import apply_pattern_rule, find_rewrite_site, SUCCESS
from ..core.symbols import SymbolTable, DEFAULT_EQUALITY


LEVEL_BASIC = 0
LEVEL_DEFINITION = 1
LEVEL_DERIVED = 2
LEVEL_CUSTOM = 99

CATEGORIES = ("basic", "definitions", "derived", "problem_specific")


@dataclass(frozen=True)
class RuleDefinition:
    """A named law lhs = rhs, written in the theory's surface syntax."""
    name: str
    text: str
    lhs: str
    rhs: str
    level: int = LEVEL_BASIC

    @classmethod
    def from_dict(cls, d: dict) -> "RuleDefinition":
        lhs = d.get("LHS", d.get("lhs"))
        rhs = d.get("RHS", d.get("rhs"))
        if lhs is None or rhs is None:
            raise ValueError(f"Rule {d.get('name')!r} needs both LHS and RHS")
        return cls(
            name=d["name"],
            text=d.get("text") or d["name"],
            lhs=lhs,
            rhs=rhs,
            level=d.get("level", LEVEL_BASIC),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "text": self.text,
                "LHS": self.lhs, "RHS": self.rhs, "level": self.level}

    def __str__(self):
        return f"{self.text}: {self.lhs} = {self.rhs}"


@dataclass(frozen=True)
class CompiledRule:
    definition: RuleDefinition
    lhs_pattern: Node
    rhs_pattern: Node
    is_custom: bool = False
    is_problem_specific: bool = False
    problem_id: Optional[str] = None

    @property
    def name(self):
        return self.definition.name

    @property
    def text(self):
        return self.definition.text

    @property
    def level(self):
        return self.definition.level


@dataclass(frozen=True)
class RuleCache:
    compiled: bool = False
    problem_id: Optional[str] = None
    rules: dict = field(default_factory=dict)


UNCOMPILED = RuleCache()


@dataclass
class StepResult:
    """Outcome of validate_step(). error is None exactly when success is True."""
    success: bool
    error: Optional[str] = None
    rule: Optional[RuleDefinition] = None
    is_custom: bool = False
    is_problem_specific: bool = False
    site: Optional[tuple] = None

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error,
            "rule": self.rule.to_dict() if self.rule else None,
            "isCustom": self.is_custom,
            "isProblemSpecific": self.is_problem_specific,
        }


def custom_rule_name(problem_id: str, law_name: str) -> str:
    slug = re.sub(r"\s+", "_", law_name).lower()
    return f"custom_{problem_id}_{slug}"


def _compile_one(parser, definition, **flags):
    """(CompiledRule, None) or (None, parser error message)."""
    lhs, lhs_err = parser.parse(definition.lhs)
    rhs, rhs_err = parser.parse(definition.rhs)
    if lhs_err or rhs_err:
        return None, lhs_err or rhs_err
    return CompiledRule(definition, lhs, rhs, **flags), None


def compile_rules(cache: RuleCache, parser: ExpressionParser, rules: list,
                  custom_laws: dict, theory_name: str) -> tuple:
    """
    Compile built-in laws plus the active problem's custom laws.

    custom_laws maps problem ids to raw law dicts. Laws tagged with a
    different theory are skipped. Returns (new cache, {rule name: error})
    for the laws that failed to parse.
    """
    compiled = {}
    errors = {}

    for definition in rules:
        rule, err = _compile_one(parser, definition)
        if err:
            errors[definition.name] = err
        else:
            compiled[definition.name] = rule

    pid = cache.problem_id
    if pid is not None:
        for law in custom_laws.get(pid, []):
            if law.get("theory") and law["theory"] != theory_name:
                continue
            label = law.get("name") or law.get("text") or ""
            name = custom_rule_name(pid, label)
            definition = RuleDefinition(
                name=name,
                text=label,
                lhs=law.get("lhs", law.get("LHS", "")),
                rhs=law.get("rhs", law.get("RHS", "")),
                level=LEVEL_CUSTOM,
            )
            rule, err = _compile_one(parser, definition, is_custom=True,
                                     is_problem_specific=True, problem_id=pid)
            if err:
                errors[name] = err
            else:
                compiled[name] = rule

    return RuleCache(compiled=True, problem_id=pid, rules=compiled), errors


def load_problem(cache: RuleCache, problem_id: str) -> RuleCache:
    """Make problem_id the active problem. Any other problem's rules are dropped."""
    return RuleCache(compiled=False, problem_id=problem_id, rules={})


def clear_problem(cache: RuleCache) -> RuleCache:
    """Back to built-in laws only."""
    return RuleCache(compiled=False, problem_id=None, rules={})


class Theory:
    """
    A named algebraic theory with its own parser and law table.

    Args:
        name:         registry key, e.g. "set_theory"
        display_name: human name, e.g. "Set Theory"
        description:  one-line summary
        symbols:      Symbol instances or dicts (id, name, text, arity, ...)
        equality:     equality sign per output form
        rules:        RuleDefinition instances or dicts (name, text, LHS, RHS, level)
        verbose:      print compilation progress and errors
    """

    def __init__(self, name, display_name, description, symbols, rules,
                 equality=None, verbose=False):
        self.name = name
        self.display_name = display_name
        self.description = description
        self.table = SymbolTable(tuple(symbols), dict(equality or DEFAULT_EQUALITY))
        self.parser = ExpressionParser(self.table)
        self.rules = tuple(
            r if isinstance(r, RuleDefinition) else RuleDefinition.from_dict(r)
            for r in rules
        )
        self.verbose = verbose
        self.compile_errors = {}
        self._custom_laws = {}
        self._cache = UNCOMPILED
        self._ensure_compiled()

    def __repr__(self):
        return f"Theory({self.name!r})"

    @property
    def symbols(self):
        return self.table.symbols

    @property
    def equality(self):
        return self.table.equality

    @property
    def current_problem_id(self) -> Optional[str]:
        return self._cache.problem_id

    @property
    def cache(self) -> RuleCache:
        return self._cache

    # ── Compilation ──────────────────────────────────────────────────────────

    def _ensure_compiled(self):
        if self._cache.compiled:
            return
        if self.verbose:
            print(f"Compiling rules for theory: {self.name}")
        self._cache, self.compile_errors = compile_rules(
            self._cache, self.parser, self.rules, self._custom_laws, self.name,
        )
        if self.verbose:
            for rule_name, err in self.compile_errors.items():
                print(f"  [error] {rule_name}: {err}")

    def load_problem_custom_laws(self, problem_id, custom_laws=None):
        """
        Activate problem_id with its custom laws, replacing any other
        problem's laws. Passing no laws reuses whatever was stored for
        problem_id before.
        """
        problem_id = str(problem_id)
        if custom_laws is not None or problem_id not in self._custom_laws:
            self._custom_laws[problem_id] = list(custom_laws or [])
        self._cache = load_problem(self._cache, problem_id)
        self._ensure_compiled()

    def clear_problem_context(self):
        """Drop the active problem's compiled laws. Raw laws are kept for reuse."""
        self._cache = clear_problem(self._cache)
        self._ensure_compiled()

    # ── Parsing ──────────────────────────────────────────────────────────────

    def parse_expression(self, expr) -> tuple:
        return self.parser.parse(expr)

    def unparse_ast(self, ast: Node, target: str = "text") -> tuple:
        return self.parser.unparse(ast, target)

    # ── Validation ───────────────────────────────────────────────────────────

    def get_compiled_rule(self, rule_name: str) -> Optional[CompiledRule]:
        if not isinstance(rule_name, str):
            return None
        self._ensure_compiled()
        return self._cache.rules.get(rule_name)

    def validate_step(self, from_ast: Node, to_ast: Node, rule_name: str) -> StepResult:
        """
        Is from_ast -> to_ast exactly one application of rule_name?

        Never raises: every failure, including a crash inside the matcher,
        is reported through StepResult.error.
        """
        compiled = self.get_compiled_rule(rule_name)
        if compiled is None:
            return StepResult(False, f"Unknown rule: {rule_name}")

        flags = dict(rule=compiled.definition,
                     is_custom=compiled.is_custom,
                     is_problem_specific=compiled.is_problem_specific)

        if not is_valid_node(from_ast) or not is_valid_node(to_ast):
            return StepResult(False, "Invalid expression tree", **flags)

        try:
            verdict = apply_pattern_rule(from_ast, to_ast,
                                         compiled.lhs_pattern, compiled.rhs_pattern)
            site = None
            if verdict == SUCCESS:
                site = find_rewrite_site(from_ast, to_ast,
                                         compiled.lhs_pattern, compiled.rhs_pattern)
        except Exception as e:
            return StepResult(False, f"Rule validation error: {e}", **flags)

        if verdict != SUCCESS:
            return StepResult(False, verdict, **flags)
        return StepResult(True, None, site=site, **flags)

    def validate_expressions(self, from_expr: str, to_expr: str, rule_name: str) -> StepResult:
        """validate_step() on two surface strings."""
        from_ast, from_err = self.parser.parse(from_expr)
        if from_err:
            return StepResult(False, f"Error in previous: {from_err}")
        to_ast, to_err = self.parser.parse(to_expr)
        if to_err:
            return StepResult(False, f"Error in expression: {to_err}")
        return self.validate_step(from_ast, to_ast, rule_name)

    # ── Rule listings ────────────────────────────────────────────────────────

    def get_all_available_rules(self) -> list:
        """Built-in laws plus the active problem's custom laws, in table order."""
        self._ensure_compiled()
        pid = self._cache.problem_id
        return [r for r in self._cache.rules.values()
                if not r.is_problem_specific or r.problem_id == pid]

    def get_rules_by_category(self) -> dict:
        categories = {c: [] for c in CATEGORIES}
        for rule in self.get_all_available_rules():
            if rule.is_problem_specific:
                categories["problem_specific"].append(rule)
            elif rule.level == LEVEL_BASIC:
                categories["basic"].append(rule)
            elif rule.level == LEVEL_DEFINITION:
                categories["definitions"].append(rule)
            elif rule.level == LEVEL_DERIVED:
                categories["derived"].append(rule)
        return categories

    def get_rule_definition(self, rule_name: str) -> Optional[RuleDefinition]:
        compiled = self.get_compiled_rule(rule_name)
        if compiled is not None:
            return compiled.definition
        return next((r for r in self.rules if r.name == rule_name), None)

    def get_rule_names(self) -> list:
        return [r.name for r in self.get_all_available_rules()]

    def get_rules_by_level(self, level: int) -> list:
        return [r.name for r in self.get_all_available_rules() if r.level == level]

    def get_custom_rules(self) -> list:
        """Raw custom laws of the active problem."""
        pid = self._cache.problem_id
        if pid is None:
            return []
        return list(self._custom_laws.get(pid, []))

    def rule_table(self) -> dict:
        """Rule name -> RuleDefinition for everything currently available."""
        return {r.name: r.definition for r in self.get_all_available_rules()}
