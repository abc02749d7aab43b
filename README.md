# contforce

A continuity restraint for groups of particles.

Each *bond* of a `ContForce` names a group of particles, a cutoff `length`
and a force constant `k`. Two particles of a group count as connected when
their distance is strictly below `length`, and connection is transitive.
When the group falls apart into several connected components, each
component is tied to the nearest particle outside it by a harmonic restraint
`E = k * (r - length)**2`; a pair chosen by both of its components is
restrained once. A group that is already connected costs nothing.

## Installation

```
pip install .
```

The package needs nothing beyond the standard library.

## Usage

```python
from contforce.force import ContForce
from contforce.context import Context

force = ContForce()
force.add_bond([0, 1, 2], 3, 1.0, 17.0)   # particle indices, npart, length, k

positions = [(0.0, 0.0, 0.0), (0.5, 0.0, 0.0), (3.0, 0.0, 0.0)]
context = Context(force, positions)

state = context.get_state(energy=True, forces=True)
print(state.potential_energy)   # 17 * (2.5 - 1.0)**2 == 38.25
print(state.forces)             # one (x, y, z) force per particle
```

Only the first `npart` entries of a bond's indices take part in it.
`force.get_bond_parameters(i)` returns a frozen `Bond` with the fields
`idxs`, `npart`, `length` and `k`; `force.num_bonds` and `force.bonds` give
the count and all terms. Bad bond indices raise `IndexError`.

`Context.get_state` returns a `State`; the parts not asked for (by default
the forces) are `None`. `set_positions` replaces the positions, whose number
must not change. A context checks that every particle index of every bond
is in range and raises `ValueError` otherwise.

### Force groups

`force.force_group` (0 to 31, default 0) puts the force in a group.
`get_state(groups=mask)` evaluates it only when bit `force_group` of `mask`
is set; otherwise energy and forces are zero.

### Changing parameters

Lengths and force constants can be changed on a live context. The particles
of a bond and the number of bonds must stay the same; otherwise `ValueError`
is raised.

```python
force.set_bond_parameters(0, [0, 1, 2], 3, 0.9, 2.2)
force.update_parameters_in_context(context)
```

### Computing directly

`contforce.reference.ReferenceContForceKernel` does the calculation without
a context: call `initialize(force)`, then
`execute(positions, include_forces, include_energy)`, which returns a tuple
of the energy and the forces. `create_kernel("CalcContForce")` builds one by
its registered name; any other name raises `ValueError`.
`find_components(dmat, length)` labels each particle with its connected
component, numbered from 0, given a distance matrix.

### Saving and loading

```python
from contforce.serialization import serialize, deserialize

text = serialize(force)        # XML text: <Force type="ContForce" version="1">
copy = deserialize(text)       # a ContForce with the same bonds
```

`deserialize` raises `ValueError` for malformed XML, a version other than 1,
or missing properties. The force group is not stored.

## What it does not do

There is no integrator or time stepping: a `Context` only evaluates energy
and forces for the positions it is given. Periodic boundary conditions are
ignored (`uses_periodic_boundary_conditions()` returns `False`), and all
evaluation runs in pure Python on the CPU.

## Running the tests

```
pip install .[test]
pytest
```