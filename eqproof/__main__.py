"""
CLI entry point. Run as: python -m eqproof <command> ...

    python -m eqproof theories
    python -m eqproof rules --theory set_theory
    python -m eqproof parse --theory prop_logic "¬(p ∨ q)" --format latex
    python -m eqproof check --theory set_theory "A ∪ A" "A" idem1
    python -m eqproof prove proof.json --format markdown
    python -m eqproof problems problems.json
"""

import argparse
import json
import sys

from .theories import THEORIES, get_theory
from .session import Problem, ProofSession, load_problems
from .export import FORMATS, format_session, print_proof


def cmd_theories(args) -> int:
    for key, entry in THEORIES.items():
        theory = get_theory(key)
        symbols = " ".join(s.text for s in theory.symbols)
        print(f"{key:<12s} {entry['display_name']:<22s} {symbols}")
    return 0


def cmd_rules(args) -> int:
    theory = get_theory(args.theory)
    eq = theory.table.equality_form("display")
    for category, rules in theory.get_rules_by_category().items():
        if not rules:
            continue
        print(f"\n{category}:")
        for rule in rules:
            d = rule.definition
            print(f"  {d.name:<12s} {d.text:<45s} {d.lhs} {eq} {d.rhs}")
    if theory.compile_errors:
        for name, err in theory.compile_errors.items():
            print(f"  [error] {name}: {err}", file=sys.stderr)
    return 0


def cmd_parse(args) -> int:
    theory = get_theory(args.theory)
    tree, err = theory.parse_expression(args.expression)
    if err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    print(theory.parser.format(tree, args.format))
    return 0


def cmd_check(args) -> int:
    theory = get_theory(args.theory)
    result = theory.validate_expressions(args.source, args.target, args.rule)
    if result.success:
        print(f"OK: {result.rule.text}")
        return 0
    print(f"Rejected: {result.error}", file=sys.stderr)
    return 1


def _script_problem(script: dict) -> Problem:
    if "problem" in script:
        return Problem.from_dict(script["problem"])
    return Problem.from_dict({
        "theory": script.get("theory"),
        "LHS": script.get("LHS"),
        "RHS": script.get("RHS"),
        "name": script.get("name", "Custom equation"),
        "customLaws": script.get("customLaws", []),
    })


def cmd_prove(args) -> int:
    with open(args.file, encoding="utf-8") as f:
        script = json.load(f)

    problem = _script_problem(script)
    session = ProofSession(problem, verbose=not args.quiet)

    for i, step in enumerate(script.get("steps", [])):
        result = session.check_step(step.get("expression", ""), step.get("rule", ""))
        if not result.success:
            print(f"Step {i + 1} rejected: {result.error}", file=sys.stderr)
            return 1

    if args.format == "text" and not args.quiet:
        print_proof(session)
    else:
        print(format_session(session, args.format))

    if args.save:
        session.save(args.save)
        print(f"Session saved to {args.save}")

    return 0 if session.is_complete() else 1


def cmd_problems(args) -> int:
    problems = load_problems(args.file)
    failed = 0
    for problem in problems:
        try:
            ProofSession(problem)
            status = "ok"
        except ValueError as e:
            status = f"error: {e}"
            failed += 1
        print(f"  {problem.problem_id:<8s} {problem.theory:<11s} {problem.name}  [{status}]")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eqproof",
                                     description="Step-checked equational proofs")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("theories", help="List available theories")

    p = sub.add_parser("rules", help="List a theory's laws")
    p.add_argument("--theory", choices=list(THEORIES.keys()), required=True)

    p = sub.add_parser("parse", help="Parse and re-render an expression")
    p.add_argument("--theory", choices=list(THEORIES.keys()), required=True)
    p.add_argument("--format", choices=["text", "markdown", "latex"], default="text")
    p.add_argument("expression")

    p = sub.add_parser("check", help="Check one rewrite step")
    p.add_argument("--theory", choices=list(THEORIES.keys()), required=True)
    p.add_argument("source", help="Expression before the step")
    p.add_argument("target", help="Expression after the step")
    p.add_argument("rule", help="Rule name, e.g. idem1")

    p = sub.add_parser("prove", help="Check a whole proof script (JSON)")
    p.add_argument("file")
    p.add_argument("--format", choices=list(FORMATS), default="text")
    p.add_argument("--save", type=str, default=None, help="Save the session to a file")
    p.add_argument("--quiet", action="store_true", help="Less output")

    p = sub.add_parser("problems", help="Validate a problem set (JSON)")
    p.add_argument("file")

    return parser


COMMANDS = {
    "theories": cmd_theories,
    "rules":    cmd_rules,
    "parse":    cmd_parse,
    "check":    cmd_check,
    "prove":    cmd_prove,
    "problems": cmd_problems,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
