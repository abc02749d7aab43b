"""A simulation context that evaluates a ContForce on a set of positions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .force import KERNEL_NAME, ContForce
from .reference import Vec3, create_kernel

_ALL_GROUPS = 0xFFFFFFFF


@dataclass(frozen=True)
class State:
    """A snapshot of what a context computed; unrequested parts are None."""

    potential_energy: float | None = None
    forces: tuple[Vec3, ...] | None = None


def _as_points(positions: Sequence[Sequence[float]]) -> tuple[Vec3, ...]:
    points = []
    for position in positions:
        if len(position) != 3:
            raise ValueError(f"a position needs three coordinates, got {len(position)}")
        x, y, z = position
        points.append((float(x), float(y), float(z)))
    return tuple(points)


class Context:
    """Binds a ContForce to particle positions and evaluates it."""

    def __init__(self, force: ContForce, positions: Sequence[Sequence[float]]) -> None:
        self._force = force
        self._positions = _as_points(positions)
        n = len(self._positions)
        for bond in force.bonds:
            for idx in bond.idxs[: bond.npart]:
                if not 0 <= idx < n:
                    raise ValueError(f"particle index {idx} out of range for {n} particles")
        self._kernel = create_kernel(KERNEL_NAME)
        self._kernel.initialize(force)

    @property
    def num_particles(self) -> int:
        """Number of particles in the context."""
        return len(self._positions)

    @property
    def positions(self) -> tuple[Vec3, ...]:
        """Current particle positions."""
        return self._positions

    def set_positions(self, positions: Sequence[Sequence[float]]) -> None:
        """Replace the positions; their number must not change."""
        points = _as_points(positions)
        if len(points) != len(self._positions):
            raise ValueError(
                f"expected {len(self._positions)} positions, got {len(points)}"
            )
        self._positions = points

    def get_state(
        self, energy: bool = True, forces: bool = False, groups: int = _ALL_GROUPS
    ) -> State:
        """Compute the requested energy and forces for the force groups in ``groups``."""
        if groups & (1 << self._force.force_group):
            total, computed = self._kernel.execute(self._positions, forces, energy)
        else:
            total, computed = 0.0, tuple((0.0, 0.0, 0.0) for _ in self._positions)
        return State(
            potential_energy=total if energy else None,
            forces=computed if forces else None,
        )

    def update_parameters(self, force: ContForce) -> None:
        """Copy changed per-term parameters of the context's own force."""
        if force is not self._force:
            raise ValueError("This Force is not present in the Context")
        self._kernel.copy_parameters(force)

    def kernel_names(self) -> list[str]:
        """Names of the kernels this context uses."""
        return [KERNEL_NAME]