"""
solver/decomposer.py — podział grupy atomów na niezależne składowe.

Dwa atomy należą do tej samej składowej, gdy (przechodnio) dzielą zmienną.
Atomy bez zmiennych tworzą pierwszą składową. Składowe ewaluowane są
osobno, a ich wyniki łączone iloczynem kartezjańskim (solver/assembler.py).
"""

from __future__ import annotations

from query_model import Argument, Atom, AtomGroup


class UnionFind:
    """Zbiory rozłączne na tablicy rodziców (kompresja ścieżek + łączenie wg rangi)."""

    def __init__(self, size: int) -> None:
        self.parent: list[int] = list(range(size))
        self.rank:   list[int] = [0] * size

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1


def find_components(group: AtomGroup) -> list[AtomGroup]:
    """
    Zwraca listę składowych grupy w kolejności pierwszego wystąpienia.

    - pusta grupa → [group]
    - atomy bez zmiennych → pierwsza składowa
    - pozostałe: union-find po zmiennych; kolejność atomów w składowej
      zgodna z kolejnością w grupie
    """
    if group.is_empty():
        return [group]

    components: list[AtomGroup] = []

    ground = [a for a in group.atoms if not a.has_variables()]
    if ground:
        components.append(AtomGroup(tuple(ground)))

    rest: list[Atom] = [a for a in group.atoms if a.has_variables()]
    if not rest:
        return components

    index: dict[Argument, int] = {}
    for atom in rest:
        for var in atom.variables:
            index.setdefault(var, len(index))

    uf = UnionFind(len(index))
    for atom in rest:
        first, *others = [index[v] for v in atom.variables]
        for other in others:
            uf.union(first, other)

    roots = [uf.find(index[atom.variables[0]]) for atom in rest]
    assigned = [False] * len(rest)
    for i, root in enumerate(roots):
        if assigned[i]:
            continue
        members: list[Atom] = []
        for j in range(i, len(rest)):
            if not assigned[j] and roots[j] == root:
                assigned[j] = True
                members.append(rest[j])
        components.append(AtomGroup(tuple(members)))

    return components
