"""
Proof export: plain text, Markdown, LaTeX and HTML renderings.

The theory is always passed in. Rule names are resolved against the
rule table handed to these functions, never against whichever theory
happens to be active elsewhere.
"""

import html
from typing import Optional

from .core.ast import Node, is_valid_node
from .theories.theory import Theory, RuleDefinition


FORMATS = ("text", "markdown", "latex", "html")

# Output format -> form used for symbols and the equality sign.
_SYMBOL_FORM = {"text": "text", "markdown": "markdown", "latex": "latex", "html": "display"}


def _check_format(fmt: str):
    if fmt not in FORMATS:
        raise ValueError(f"Format not supported: {fmt!r}. Choose from: {list(FORMATS)}")


def equality_symbol(theory: Theory, fmt: str = "text") -> str:
    return theory.table.equality_form(_SYMBOL_FORM.get(fmt, "display"))


def rule_display_name(rule, rules: Optional[dict] = None) -> str:
    """
    Human-readable name of a rule.

    rule is a RuleDefinition or a rule name; names are looked up in
    rules (name -> RuleDefinition) and fall back to the name itself.
    """
    if isinstance(rule, RuleDefinition):
        return rule.text or rule.name
    if isinstance(rule, str):
        found = (rules or {}).get(rule)
        return found.text if found is not None and found.text else rule
    return str(rule)


def _renderable(tree: Node) -> bool:
    """Every node has at most two children."""
    return len(tree.children) <= 2 and all(_renderable(c) for c in tree.children)


def format_expression(theory: Theory, expr, fmt: str = "text") -> str:
    """
    Render an expression string or tree. Strings that do not parse are
    returned unchanged (escaped for HTML).
    """
    _check_format(fmt)
    if isinstance(expr, Node):
        tree = expr if is_valid_node(expr) and _renderable(expr) else None
    else:
        tree, _ = theory.parse_expression(expr)
    if tree is None:
        text = expr if isinstance(expr, str) else ""
    else:
        text = theory.parser.format(tree, _SYMBOL_FORM[fmt])
    return html.escape(text) if fmt == "html" else text


def format_proof(theory: Theory, lhs, steps: list, fmt: str = "text",
                 rules: Optional[dict] = None) -> str:
    """
    Render a proof: the starting expression, then one line per step
    with its justification.

    steps are ProofStep-like objects with .expression and .rule.
    """
    _check_format(fmt)
    if rules is None:
        rules = theory.rule_table()
    eq = equality_symbol(theory, fmt)
    start = format_expression(theory, lhs, fmt)

    rows = [(format_expression(theory, s.expression, fmt),
             rule_display_name(s.rule, rules)) for s in steps]

    if fmt == "markdown":
        lines = ["| Expression | Rule |", "|------------|------|", f"| {start} | Given |"]
        lines += [f"| {expr} | {rule} |" for expr, rule in rows]
    elif fmt == "latex":
        lines = ["\\[\\begin{array}{rclr}", f"    {start}"]
        body = [f"    &{eq}& {expr} &\\quad\\text{{({rule})}}" for expr, rule in rows]
        lines += [line + "\\\\" for line in body[:-1]] + body[-1:]
        lines.append("\\end{array}\\]")
    elif fmt == "html":
        lines = ['<table style="white-space:nowrap;">',
                 f"<tr><td>{start}</td><td></td></tr>"]
        lines += [
            f"<tr><td></td><td>&nbsp;{html.escape(eq)} {expr}</td>"
            f"<td>&nbsp;&nbsp;&nbsp;({html.escape(rule)})</td></tr>"
            for expr, rule in rows
        ]
        lines.append("</table>")
    else:
        lines = [f"  {start}"]
        width = max((len(expr) for expr, _ in rows), default=0)
        lines += [f"  {eq} {expr:<{width}}   ({rule})" for expr, rule in rows]

    return "\n".join(lines)


def format_session(session, fmt: str = "text") -> str:
    """format_proof() for a ProofSession."""
    return format_proof(session.theory, session.problem.lhs, session.steps, fmt)


def print_proof(session):
    """Pretty-print a session's proof and whether it reaches the goal."""
    theory = session.theory
    eq = equality_symbol(theory)
    goal = format_expression(theory, session.problem.rhs)
    start = format_expression(theory, session.problem.lhs)
    print(f"\n{'='*60}")
    print(f"PROOF ({theory.display_name}): {start} {eq} {goal}")
    print(f"{'='*60}")
    if not session.steps:
        print("  No steps yet.")
    else:
        print(format_session(session, "text"))
    print(f"{'='*60}")
    if session.is_complete():
        print("  QED: the last expression is the goal.")
    else:
        print(f"  Incomplete: {format_expression(theory, session.current_expression())} "
              f"is not yet {goal}.")
