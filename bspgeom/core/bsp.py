"""Binary space partitioning trees as an immutable tagged union.

A tree is either a ``Leaf(inside)`` or a ``Cut(sub, plus, minus)``. The cut
stores its hyperplane already clipped to the node's cell (the intersection
of the half-spaces along the root path), which is what lets the merge and
boundary routines below stay dimension-generic: every clip is a
sub-hyperplane split, i.e. a region operation one dimension down.

Nodes are never mutated after construction, so subtrees are shared freely
between the operands and results of boolean operations.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Tuple, TypeVar, Union

from .partitioning import HyperplaneLocation, Location, Side, SubHyperplane

T = TypeVar('T')

__all__ = [
    'Leaf', 'Cut', 'LEAF_IN', 'LEAF_OUT', 'Node',
    'make_cut', 'fold', 'iter_cuts', 'tree_size', 'tree_depth',
    'complement', 'simplify', 'split', 'merge',
    'classify_point', 'characterize', 'boundary_facets',
]


@dataclass(frozen=True)
class Leaf:
    inside: bool

    def __repr__(self):
        return 'Leaf(IN)' if self.inside else 'Leaf(OUT)'


@dataclass(frozen=True, eq=False)
class Cut:
    sub: SubHyperplane
    plus: 'Node'
    minus: 'Node'

    @property
    def hyperplane(self):
        return self.sub.hyperplane


Node = Union[Leaf, Cut]

LEAF_IN = Leaf(True)
LEAF_OUT = Leaf(False)


def _leaf(inside: bool) -> Leaf:
    return LEAF_IN if inside else LEAF_OUT


def make_cut(sub: SubHyperplane, plus: Node, minus: Node) -> Node:
    """Build a cut node, condensing it to a leaf when both children are equal leaves."""
    if isinstance(plus, Leaf) and isinstance(minus, Leaf) and plus.inside == minus.inside:
        return plus
    return Cut(sub, plus, minus)


def fold(node: Node, leaf_fn: Callable[[Leaf], T], cut_fn: Callable[[Cut, T, T], T]) -> T:
    """Structural fold: ``leaf_fn`` on leaves, ``cut_fn(node, plus_value, minus_value)`` on cuts."""
    if isinstance(node, Leaf):
        return leaf_fn(node)
    return cut_fn(node, fold(node.plus, leaf_fn, cut_fn), fold(node.minus, leaf_fn, cut_fn))


def iter_cuts(node: Node) -> Iterator[Cut]:
    """Pre-order iteration over the cut nodes."""
    stack = [node]
    while stack:
        n = stack.pop()
        if isinstance(n, Cut):
            yield n
            stack.append(n.minus)
            stack.append(n.plus)


def tree_size(node: Node) -> int:
    return fold(node, lambda leaf: 1, lambda c, p, m: 1 + p + m)


def tree_depth(node: Node) -> int:
    return fold(node, lambda leaf: 0, lambda c, p, m: 1 + max(p, m))


def complement(node: Node) -> Node:
    """Flip every leaf; cuts and their orientation are kept."""
    return fold(node, lambda leaf: _leaf(not leaf.inside), lambda c, p, m: Cut(c.sub, p, m))


def simplify(node: Node) -> Node:
    """Collapse every subtree whose leaves all carry the same flag."""
    return fold(node, lambda leaf: leaf, lambda c, p, m: make_cut(c.sub, p, m))


def split(node: Node, sub: SubHyperplane) -> Tuple[Node, Node]:
    """Split ``node`` by ``sub`` (the splitting hyperplane clipped to the node cell).

    Returns ``(plus, minus)``: the trees describing the parts of the cell on
    the plus and minus side of ``sub.hyperplane``.
    """
    if isinstance(node, Leaf):
        return node, node

    cut = node.sub
    hyperplane = sub.hyperplane
    sub_parts = sub.split(cut.hyperplane)
    side = sub_parts.side

    if side is Side.PLUS:
        # sub lies in the plus child, so the whole minus child is on one side of it
        pp, pm = split(node.plus, sub)
        if cut.split(hyperplane).side is Side.PLUS:
            return make_cut(cut, pp, node.minus), pm
        return pp, make_cut(cut, pm, node.minus)

    if side is Side.MINUS:
        mp, mm = split(node.minus, sub)
        if cut.split(hyperplane).side is Side.PLUS:
            return make_cut(cut, node.plus, mp), mm
        return mp, make_cut(cut, node.plus, mm)

    if side is Side.BOTH:
        cut_parts = cut.split(hyperplane)
        pp, pm = split(node.plus, sub_parts.plus)
        mp, mm = split(node.minus, sub_parts.minus)
        plus_cut = cut_parts.plus if cut_parts.plus is not None else cut
        minus_cut = cut_parts.minus if cut_parts.minus is not None else cut
        return make_cut(plus_cut, pp, mp), make_cut(minus_cut, pm, mm)

    # coplanar cuts
    if cut.hyperplane.same_orientation_as(hyperplane):
        return node.plus, node.minus
    return node.minus, node.plus


LeafRule = Callable[[Leaf, Node, bool], Node]


def merge(first: Node, second: Node, rule: LeafRule) -> Node:
    """Combine two trees covering the same cell.

    Wherever one operand reaches a leaf, ``rule(leaf, other_subtree,
    leaf_is_first)`` decides the subtree of the result. Otherwise the second
    tree is split by the first tree's cut and both halves are merged
    recursively; coplanar cuts are coalesced by ``split``.
    """
    if isinstance(first, Leaf):
        return rule(first, second, True)
    if isinstance(second, Leaf):
        return rule(second, first, False)
    second_plus, second_minus = split(second, first.sub)
    return make_cut(first.sub,
                    merge(first.plus, second_plus, rule),
                    merge(first.minus, second_minus, rule))


def classify_point(node: Node, point) -> Location:
    """Walk the tree; a point ON a cut asks both children and keeps their verdict only if they agree."""
    if isinstance(node, Leaf):
        return Location.INSIDE if node.inside else Location.OUTSIDE
    loc = node.sub.hyperplane.classify(point)
    if loc is HyperplaneLocation.PLUS:
        return classify_point(node.plus, point)
    if loc is HyperplaneLocation.MINUS:
        return classify_point(node.minus, point)
    plus = classify_point(node.plus, point)
    minus = classify_point(node.minus, point)
    if plus is minus and plus is not Location.BOUNDARY:
        return plus
    return Location.BOUNDARY


def characterize(node: Node, sub: SubHyperplane, facing_plus: bool) -> Tuple[List[SubHyperplane], List[SubHyperplane]]:
    """Split ``sub`` into the parts lying against outside and inside cells of ``node``.

    ``sub`` sits on the cut of an ancestor; ``facing_plus`` tells which side
    of that cut ``node`` describes, which settles pieces that lie exactly on
    a descendant cut. Returns ``(outside_parts, inside_parts)``.
    """
    outside: List[SubHyperplane] = []
    inside: List[SubHyperplane] = []
    stack = [(node, sub)]
    while stack:
        n, s = stack.pop()
        if isinstance(n, Leaf):
            (inside if n.inside else outside).append(s)
            continue
        parts = s.split(n.sub.hyperplane)
        side = parts.side
        if side is Side.PLUS:
            stack.append((n.plus, s))
        elif side is Side.MINUS:
            stack.append((n.minus, s))
        elif side is Side.BOTH:
            stack.append((n.plus, parts.plus))
            stack.append((n.minus, parts.minus))
        else:
            same = n.sub.hyperplane.same_orientation_as(s.hyperplane)
            stack.append((n.plus if same == facing_plus else n.minus, s))
    return outside, inside


def boundary_facets(node: Cut) -> List[Tuple[SubHyperplane, bool]]:
    """Boundary pieces contributed by one cut node.

    Each entry is ``(piece, inside_on_plus)``: the part of the cut with an
    inside cell on one side and an outside cell on the other.
    """
    facets: List[Tuple[SubHyperplane, bool]] = []
    plus_out, plus_in = characterize(node.plus, node.sub, True)
    for piece in plus_out:
        _, minus_in = characterize(node.minus, piece, False)
        facets.extend((f, False) for f in minus_in)
    for piece in plus_in:
        minus_out, _ = characterize(node.minus, piece, False)
        facets.extend((f, True) for f in minus_out)
    return facets
