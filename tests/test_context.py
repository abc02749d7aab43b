import math

import pytest

from contforce.context import Context, State
from contforce.force import ContForce


def _assert_close(expected, found, tol):
    scale = max(abs(expected), 1.0)
    assert abs(expected - found) / scale <= tol, (expected, found)


def test_force_chain_energy_and_finite_differences():
    positions = [(i, 0.7, 0.5) if i != 9 else (i, 0.7, 2.1) for i in range(10)]
    force = ContForce()
    force.add_bond(list(range(10)), 10, 1.0, 17)
    context = Context(force, positions)
    state = context.get_state(energy=True, forces=True)

    dr = math.sqrt(1.0 + 1.6 ** 2) - 1.0
    _assert_close(17 * dr * dr, state.potential_energy, 1e-5)

    offset = 1e-3
    for i in range(10):
        for j in range(3):
            moved = [list(p) for p in positions]
            moved[i][j] = positions[i][j] - offset
            context.set_positions(moved)
            e1 = context.get_state(energy=True).potential_energy
            moved[i][j] = positions[i][j] + offset
            context.set_positions(moved)
            e2 = context.get_state(energy=True).potential_energy
            _assert_close(state.forces[i][j], (e1 - e2) / (2 * offset), 1e-2)


def test_changing_parameters():
    force = ContForce()
    force.add_bond([0, 1], 2, 0.5, 1.5)
    context = Context(force, [(1, 0, 0), (2, 0, 0)])
    _assert_close(1.5 * (1.0 - 0.5) ** 2, context.get_state().potential_energy, 1e-5)

    force.set_bond_parameters(0, [0, 1], 2, 0.9, 2.2)
    force.update_parameters_in_context(context)
    _assert_close(2.2 * (1.0 - 0.9) ** 2, context.get_state().potential_energy, 1e-5)


def test_multiple_bonds():
    force = ContForce()
    force.add_bond([0, 1], 2, 0.5, 17)
    force.add_bond([0, 2], 2, 0.5, 17)
    context = Context(force, [(0, 0, 0), (-1, 0, 0), (1, 0, 0)])
    state = context.get_state(energy=True, forces=True)
    _assert_close(2 * 17 * 0.25, state.potential_energy, 1e-5)
    for component in state.forces[0]:
        _assert_close(0.0, component, 1e-5)


def test_state_leaves_unrequested_parts_empty():
    force = ContForce()
    force.add_bond([0, 1], 2, 0.5, 1.5)
    context = Context(force, [(1, 0, 0), (2, 0, 0)])
    assert context.get_state(energy=True, forces=False) == State(potential_energy=0.375)
    only_forces = context.get_state(energy=False, forces=True)
    assert only_forces.potential_energy is None
    assert only_forces.forces[0][0] == pytest.approx(1.5)


def test_groups_exclude_force():
    force = ContForce()
    force.add_bond([0, 1], 2, 0.5, 1.5)
    force.force_group = 3
    context = Context(force, [(1, 0, 0), (2, 0, 0)])
    excluded = context.get_state(energy=True, forces=True, groups=1 << 2)
    assert excluded.potential_energy == 0.0
    assert excluded.forces == ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    included = context.get_state(energy=True, groups=1 << 3)
    assert included.potential_energy == pytest.approx(0.375)


def test_update_parameters_rejects_foreign_force():
    force = ContForce()
    force.add_bond([0, 1], 2, 0.5, 1.5)
    context = Context(force, [(1, 0, 0), (2, 0, 0)])
    other = ContForce()
    other.add_bond([0, 1], 2, 0.5, 1.5)
    with pytest.raises(ValueError, match="not present"):
        context.update_parameters(other)


def test_update_parameters_rejects_changed_particles():
    force = ContForce()
    force.add_bond([0, 1, 2], 3, 0.5, 1.5)
    context = Context(force, [(0, 0, 0), (1, 0, 0), (2, 0, 0)])
    force.set_bond_parameters(0, [0, 1, 2], 2, 0.5, 1.5)
    with pytest.raises(ValueError, match="particle index"):
        force.update_parameters_in_context(context)


def test_set_positions_checks_count_and_shape():
    force = ContForce()
    context = Context(force, [(0, 0, 0), (1, 0, 0)])
    with pytest.raises(ValueError):
        context.set_positions([(0, 0, 0)])
    with pytest.raises(ValueError):
        context.set_positions([(0, 0), (1, 0)])
    context.set_positions([(3, 2, 1), (4, 5, 6)])
    assert context.positions == ((3.0, 2.0, 1.0), (4.0, 5.0, 6.0))
    assert context.num_particles == 2


def test_out_of_range_index_rejected():
    force = ContForce()
    force.add_bond([0, 5], 2, 0.5, 1.5)
    with pytest.raises(ValueError, match="out of range"):
        Context(force, [(0, 0, 0), (1, 0, 0)])


def test_kernel_names():
    context = Context(ContForce(), [(0, 0, 0)])
    assert context.kernel_names() == ["CalcContForce"]