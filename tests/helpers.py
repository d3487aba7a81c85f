from treeviz import make_tree


def build(kind, values, **kwargs):
    tree = make_tree(kind, **kwargs)
    for v in values:
        tree.insert(v)
    return tree


def shape(tree):
    """Comparable description of the tree's structure and metadata."""
    return [n.to_dict() for n in tree.snapshot_for_rendering()]


def by_value(tree):
    return {n.value: n for n in tree.snapshot_for_rendering()}
