"""Pure Python evaluation of the continuity force."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .force import KERNEL_NAME, Bond, ContForce

Vec3 = tuple[float, float, float]


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _distance_matrix(points: Sequence[Sequence[float]]) -> list[list[float]]:
    n = len(points)
    dmat = [[0.0] * n for _ in range(n)]
    for a in range(n - 1):
        for b in range(a + 1, n):
            delta = _sub(points[a], points[b])
            dmat[a][b] = dmat[b][a] = math.sqrt(sum(x * x for x in delta))
    return dmat


def find_components(dmat: Sequence[Sequence[float]], length: float) -> list[int]:
    """Label each particle with the connected component it belongs to.

    Two particles are connected when their distance is strictly below
    ``length``. Components are numbered from 0 in the order of their
    lowest-indexed particle.
    """
    n = len(dmat)
    labels = [-1] * n
    current = 0
    for start in range(n):
        if labels[start] != -1:
            continue
        labels[start] = current
        pending = [start]
        while pending:
            at = pending.pop()
            for other in range(n):
                if labels[other] == -1 and dmat[other][at] < length:
                    labels[other] = current
                    pending.append(other)
        current += 1
    return labels


def _restrained_pairs(
    dmat: Sequence[Sequence[float]], labels: Sequence[int], num_components: int
) -> set[tuple[int, int]]:
    """For each component, the closest pair linking it to a particle outside it."""
    pairs: set[tuple[int, int]] = set()
    n = len(labels)
    for comp in range(num_components):
        best: tuple[int, int] | None = None
        best_dist = -1.0
        for inside in (i for i in range(n) if labels[i] == comp):
            for outside in (j for j in range(n) if labels[j] != comp):
                dist = dmat[inside][outside]
                if best is None or dist < best_dist:
                    best_dist = dist
                    best = (inside, outside)
        if best is not None:
            pairs.add((min(best), max(best)))
    return pairs


class ReferenceContForceKernel:
    """Computes energy and forces of a ContForce on the CPU."""

    def __init__(self) -> None:
        self._bonds: list[Bond] = []

    @property
    def bonds(self) -> tuple[Bond, ...]:
        """The terms the kernel currently evaluates."""
        return tuple(self._bonds)

    def initialize(self, force: ContForce) -> None:
        """Take a copy of the force's terms."""
        for bond in force.bonds:
            if not 0 <= bond.npart <= len(bond.idxs):
                raise ValueError(
                    f"npart {bond.npart} does not fit the {len(bond.idxs)} particle indices given"
                )
        self._bonds = list(force.bonds)

    def execute(
        self,
        positions: Sequence[Sequence[float]],
        include_forces: bool = True,
        include_energy: bool = True,
    ) -> tuple[float, tuple[Vec3, ...]]:
        """Return the potential energy and the force on every particle."""
        forces: list[Vec3] = [(0.0, 0.0, 0.0)] * len(positions)
        energy = 0.0
        for bond in self._bonds:
            members = bond.idxs[: bond.npart]
            points = [positions[i] for i in members]
            dmat = _distance_matrix(points)
            labels = find_components(dmat, bond.length)
            num_components = max(labels, default=-1) + 1
            if num_components <= 1:
                continue
            for a, b in sorted(_restrained_pairs(dmat, labels, num_components)):
                dist = dmat[a][b]
                dr = dist - bond.length
                if include_energy:
                    energy += bond.k * dr * dr
                if include_forces:
                    de_dr = 2 * bond.k * dr
                    de_dr = de_dr / dist if dist > 0 else 0.0
                    delta = _sub(points[a], points[b])
                    ia, ib = members[a], members[b]
                    forces[ia] = tuple(f - x * de_dr for f, x in zip(forces[ia], delta))
                    forces[ib] = tuple(f + x * de_dr for f, x in zip(forces[ib], delta))
        return energy, tuple(forces)

    def copy_parameters(self, force: ContForce) -> None:
        """Take over changed lengths and force constants from ``force``.

        Raises ValueError if the number of terms or any term's particles changed.
        """
        if force.num_bonds != len(self._bonds):
            raise ValueError("updateParametersInContext: The number of bonds has changed")
        for i, new in enumerate(force.bonds):
            old = self._bonds[i]
            self._bonds[i] = Bond(old.idxs, old.npart, new.length, new.k)
            if new.npart != old.npart or new.idxs != old.idxs:
                raise ValueError("updateParametersInContext: A particle index has changed")


def create_kernel(name: str) -> ReferenceContForceKernel:
    """Create the kernel registered under ``name``."""
    if name == KERNEL_NAME:
        return ReferenceContForceKernel()
    raise ValueError(f"Tried to create kernel with illegal kernel name '{name}'")