"""The continuity force: a set of particle groups kept together by restraints."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

KERNEL_NAME = "CalcContForce"
"""Name under which the kernel that evaluates a ContForce is registered."""

_MAX_FORCE_GROUP = 31


class _ParameterTarget(Protocol):
    def update_parameters(self, force: ContForce) -> None: ...


@dataclass(frozen=True)
class Bond:
    """Parameters of one continuity term.

    ``idxs`` are the particle indices in the group, ``npart`` the number of
    them the term uses, ``length`` the cut-off distance in nm below which two
    particles count as connected, and ``k`` the force constant in kJ/mol/nm^2.
    """

    idxs: tuple[int, ...] = field(default_factory=tuple)
    npart: int = 0
    length: float = 0.0
    k: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "idxs", tuple(int(i) for i in self.idxs))
        object.__setattr__(self, "npart", int(self.npart))
        object.__setattr__(self, "length", float(self.length))
        object.__setattr__(self, "k", float(self.k))


class ContForce:
    """Holds continuity terms that pull disconnected parts of a group together."""

    def __init__(self) -> None:
        self._bonds: list[Bond] = []
        self._force_group = 0

    def __repr__(self) -> str:
        return f"ContForce(bonds={self._bonds!r}, force_group={self._force_group})"

    @property
    def num_bonds(self) -> int:
        """Number of continuity terms in the force."""
        return len(self._bonds)

    @property
    def bonds(self) -> tuple[Bond, ...]:
        """All terms, in the order they were added."""
        return tuple(self._bonds)

    @property
    def force_group(self) -> int:
        """Force group this force belongs to, from 0 to 31."""
        return self._force_group

    @force_group.setter
    def force_group(self, group: int) -> None:
        if not 0 <= group <= _MAX_FORCE_GROUP:
            raise ValueError(f"force group must be between 0 and {_MAX_FORCE_GROUP}, got {group}")
        self._force_group = group

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._bonds):
            raise IndexError(f"bond index {index} out of range (force has {len(self._bonds)} bonds)")

    def add_bond(self, idxs: Iterable[int], npart: int, length: float, k: float) -> int:
        """Add a term and return its index."""
        self._bonds.append(Bond(tuple(idxs), npart, length, k))
        return len(self._bonds) - 1

    def get_bond_parameters(self, index: int) -> Bond:
        """Return the parameters of the term at ``index``."""
        self._check_index(index)
        return self._bonds[index]

    def set_bond_parameters(
        self, index: int, idxs: Iterable[int], npart: int, length: float, k: float
    ) -> None:
        """Replace the parameters of the term at ``index``."""
        self._check_index(index)
        self._bonds[index] = Bond(tuple(idxs), npart, length, k)

    def update_parameters_in_context(self, context: _ParameterTarget) -> None:
        """Copy this force's per-term length and k into an existing context.

        The particles of each term and the number of terms cannot change;
        the context raises if they have.
        """
        context.update_parameters(self)

    def uses_periodic_boundary_conditions(self) -> bool:
        """The force ignores periodic boundaries."""
        return False