"""
Command-line driver.

    treeviz --tree avl --insert 10,20,30 --delete 20 --find 30 --trace
    treeviz --tree redblack --insert "7 3 18 10 22" --png tree.png

Operations run in the order they are given on the command line.
"""

import argparse
import json
import logging
import sys

from treeviz.settings import Settings
from treeviz.traversal import TraversalKind
from treeviz.trees import TREE_TYPES, make_tree
from treeviz.validate import tree_stats, violations

logger = logging.getLogger(__name__)


def parse_values(text):
    """
    Parse a string of comma/space separated integers.

    Raises:
        argparse.ArgumentTypeError: A token is not an integer.

    Examples:
        >>> parse_values("7,3,18,10,22")
        [7, 3, 18, 10, 22]
        >>> parse_values("1 2  -3")
        [1, 2, -3]
    """
    result = []
    for token in text.replace(",", " ").split():
        try:
            result.append(int(token))
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"not an integer: {token!r}") from None
    return result


class _QueueOp(argparse.Action):
    """Append ``(operation, values)`` to ``namespace.ops`` in CLI order."""

    def __call__(self, parser, namespace, values, option_string=None):
        ops = getattr(namespace, "ops", None) or []
        ops.append((self.const, values))
        namespace.ops = ops


def build_parser():
    p = argparse.ArgumentParser(
        prog="treeviz",
        description="Run AVL / Red-Black tree operations and show their "
                    "step traces.")
    p.add_argument("--tree", default="avl",
                   choices=sorted(TREE_TYPES) + ["rb"],
                   help="tree type (default: avl)")
    p.add_argument("-i", "--insert", action=_QueueOp, const="insert",
                   type=parse_values, metavar="VALUES", dest="ops",
                   help="values to insert, e.g. '5,3,8'")
    p.add_argument("-d", "--delete", action=_QueueOp, const="delete",
                   type=parse_values, metavar="VALUES", dest="ops",
                   help="values to delete")
    p.add_argument("-f", "--find", action=_QueueOp, const="find",
                   type=parse_values, metavar="VALUES", dest="ops",
                   help="values to look up")
    p.add_argument("--trace", action="store_true",
                   help="print the step trace of every operation")
    p.add_argument("--traverse", default="inorder",
                   choices=[k.value for k in TraversalKind],
                   help="traversal printed at the end (default: inorder)")
    p.add_argument("--speed", type=float, default=None,
                   help="playback speed multiplier for suggested durations")
    p.add_argument("--png", metavar="FILE",
                   help="write the final tree layout to a PNG file")
    p.add_argument("--json", action="store_true",
                   help="print results as JSON instead of text")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="debug logging")
    p.set_defaults(ops=[])
    return p


def run(args, out=None):
    """
    Execute parsed *args*; return the process exit status.

    Output goes to *out*, or to whatever ``sys.stdout`` is at call time.
    """
    if out is None:
        out = sys.stdout
    settings = Settings()
    if args.speed is not None:
        settings.update(speed=args.speed)
    tree = make_tree(args.tree, settings=settings)

    results = []
    last_step = None
    for op, values in args.ops:
        for value in values:
            result = getattr(tree, op)(value, trace=args.trace)
            results.append((op, value, result))
            if result.steps:
                last_step = result.steps[-1]

    order = tree.traverse(args.traverse)
    problems = violations(tree)
    stats = tree_stats(tree)

    if args.json:
        json.dump({
            "tree": tree.kind,
            "operations": [dict(op=op, value=v, **r.to_dict())
                           for op, v, r in results],
            args.traverse: order,
            "nodes": [n.to_dict() for n in tree.snapshot_for_rendering()],
            "violations": problems,
        }, out, indent=2)
        out.write("\n")
    else:
        for op, value, result in results:
            out.write(f"{op} {value}: {result.message}\n")
            for i, step in enumerate(result.steps or (), 1):
                out.write(f"  {i:>3}. {step}\n")
        out.write(f"{args.traverse}: {order}\n")
        line = f"{stats.nodes} nodes, height {stats.height}"
        if stats.black_height is not None:
            line += (f", black height {stats.black_height}, "
                     f"{stats.red} red / {stats.black} black")
        out.write(line + "\n")
        out.write("valid\n" if not problems else
                  "INVALID: " + "; ".join(problems) + "\n")

    if args.png:
        # imported here so text-only runs don't load Pillow
        from treeviz.render import TreeImageRenderer
        renderer = TreeImageRenderer(settings)
        renderer.save_png(tree.snapshot_for_rendering(), args.png,
                          step=last_step,
                          title=f"{tree.kind} tree, {len(tree)} nodes")

    return 0 if not problems else 1


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    sys.exit(main())
