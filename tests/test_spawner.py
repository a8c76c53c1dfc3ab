from pathlib import Path

import pytest

p = pytest.importorskip("pybullet")
pybullet_data = pytest.importorskip("pybullet_data")

from autolevel.core.level import LevelGenerator
from autolevel.core.placer import euler_to_quaternion, place
from autolevel.core.spawner import (
    PyBulletSpawner,
    Spawner,
    to_z_up_position,
    to_z_up_rotation,
)
from autolevel.protocol import PropDefinition, TrackConfig

CUBE_OBJ = """\
v -0.5 -0.5 -0.5
v 0.5 -0.5 -0.5
v 0.5 0.5 -0.5
v -0.5 0.5 -0.5
v -0.5 -0.5 0.5
v 0.5 -0.5 0.5
v 0.5 0.5 0.5
v -0.5 0.5 0.5
f 1 3 2
f 1 4 3
f 5 6 7
f 5 7 8
f 1 2 6
f 1 6 5
f 2 3 7
f 2 7 6
f 3 4 8
f 3 8 7
f 4 1 5
f 4 5 8
"""

BOX_URDF = """\
<?xml version="1.0"?>
<robot name="box">
  <link name="base">
    <inertial>
      <origin xyz="0 0 0" rpy="0 0 0"/>
      <mass value="1.0"/>
      <inertia ixx="0.1" ixy="0" ixz="0" iyy="0.1" iyz="0" izz="0.1"/>
    </inertial>
    <visual>
      <geometry><box size="0.5 0.5 0.5"/></geometry>
    </visual>
    <collision>
      <geometry><box size="0.5 0.5 0.5"/></geometry>
    </collision>
  </link>
</robot>
"""


@pytest.fixture
def box_urdf(tmp_path: Path) -> str:
    path = tmp_path / "box.urdf"
    path.write_text(BOX_URDF)
    return str(path)


@pytest.fixture
def cli():
    client = p.connect(p.DIRECT)
    p.setAdditionalSearchPath(pybullet_data.getDataPath(), physicsClientId=client)
    try:
        yield client
    finally:
        p.disconnect(physicsClientId=client)


def _body_count(client: int) -> int:
    return p.getNumBodies(physicsClientId=client)


def test_pybullet_spawner_is_a_spawner(cli):
    assert isinstance(PyBulletSpawner(cli), Spawner)


def test_spawn_urdf_at_raw_pose_and_despawn(cli, box_urdf):
    spawner = PyBulletSpawner(cli, y_up=False)
    orn = p.getQuaternionFromEuler([0.0, 0.0, 1.0])

    body = spawner.spawn(box_urdf, (1.0, 2.0, 3.0), orn)

    pos, got_orn = p.getBasePositionAndOrientation(body, physicsClientId=cli)
    assert pos == pytest.approx((1.0, 2.0, 3.0), abs=1e-6)
    assert got_orn == pytest.approx(orn, abs=1e-6)
    assert _body_count(cli) == 1

    spawner.despawn(body)
    assert _body_count(cli) == 0


def test_spawn_obj_mesh_reuses_cached_shapes(cli, tmp_path: Path):
    mesh = tmp_path / "cube.obj"
    mesh.write_text(CUBE_OBJ)
    spawner = PyBulletSpawner(cli)

    a = spawner.spawn(mesh, (0.0, 0.0, 5.0), (0.0, 0.0, 0.0, 1.0))
    b = spawner.spawn(str(mesh), (0.0, 0.0, 9.0), (0.0, 0.0, 0.0, 1.0))

    assert a != b
    assert len(spawner._shape_cache) == 1
    pos, _ = p.getBasePositionAndOrientation(b, physicsClientId=cli)
    assert pos == pytest.approx((0.0, 9.0, 0.0), abs=1e-6)


def test_missing_assets_raise(cli, tmp_path: Path):
    spawner = PyBulletSpawner(cli)
    with pytest.raises(FileNotFoundError):
        spawner.spawn(tmp_path / "nope.obj", (0, 0, 0), (0, 0, 0, 1))
    with pytest.raises(FileNotFoundError):
        spawner.spawn(str(tmp_path / "nope.urdf"), (0, 0, 0), (0, 0, 0, 1))


def test_unsupported_model_type(cli):
    with pytest.raises(ValueError, match="Unsupported model type"):
        PyBulletSpawner(cli).spawn("crate.fbx", (0, 0, 0), (0, 0, 0, 1))


def test_level_generator_in_pybullet_world(cli, box_urdf):
    props = [
        PropDefinition(
            model=box_urdf,
            position_samples=[(-2, 0, 0), (2, 0, 0)],
            min_safe_distance=3,
            max_safe_distance=6,
        ),
    ]
    track = TrackConfig(start_line=0, end_line=60, prop_spawn_offset=5, level_end_offset=5)
    gen = LevelGenerator(PyBulletSpawner(cli), props, track, seed=21)

    layout = gen.regenerate()
    assert _body_count(cli) == len(layout) == len(gen.spawned)
    for body, rec in zip(gen.spawned, layout):
        pos, _ = p.getBasePositionAndOrientation(body, physicsClientId=cli)
        assert pos == pytest.approx(to_z_up_position(rec.position), abs=1e-6)

    relaid = gen.regenerate(seed=22)
    assert _body_count(cli) == len(relaid)

    gen.clear()
    assert _body_count(cli) == 0


# ──────────────────────────── Track frame → PyBullet frame ───────────────────
def test_track_lies_on_the_ground_plane(cli, box_urdf):
    prop = PropDefinition(model=box_urdf, min_safe_distance=40, max_safe_distance=60)
    layout = place(TrackConfig(start_line=0, end_line=400), [prop], seed=4)
    spawner = PyBulletSpawner(cli)
    assert len(layout) > 0

    for rec in layout:
        body = spawner.spawn(rec.model, rec.position, rec.rotation)
        pos, _ = p.getBasePositionAndOrientation(body, physicsClientId=cli)
        assert pos[2] == pytest.approx(0.0, abs=1e-6)
        assert pos[1] == pytest.approx(rec.cursor, abs=1e-6)


def test_lifted_prop_rises_along_pybullet_z(cli, box_urdf):
    body = PyBulletSpawner(cli).spawn(box_urdf, (1.0, 0.5, 30.0), (0.0, 0.0, 0.0, 1.0))
    pos, _ = p.getBasePositionAndOrientation(body, physicsClientId=cli)
    assert pos == pytest.approx((1.0, 30.0, 0.5), abs=1e-6)


def test_yaw_about_track_up_turns_about_pybullet_z(cli, box_urdf):
    # A quarter turn about "up" swings the track's forward axis onto +X.
    body = PyBulletSpawner(cli).spawn(
        box_urdf, (0.0, 0.0, 0.0), euler_to_quaternion((0.0, 90.0, 0.0))
    )
    _, orn = p.getBasePositionAndOrientation(body, physicsClientId=cli)
    m = p.getMatrixFromQuaternion(orn)
    up = (m[2], m[5], m[8])
    forward = (m[1], m[4], m[7])
    assert up == pytest.approx((0.0, 0.0, 1.0), abs=1e-6)
    assert forward == pytest.approx((1.0, 0.0, 0.0), abs=1e-6)


def test_frame_mapping_helpers():
    assert to_z_up_position((1, 2, 3)) == [1.0, 3.0, 2.0]
    assert to_z_up_rotation((0.0, 0.0, 0.0, 1.0)) == [-0.0, -0.0, -0.0, 1.0]
    assert to_z_up_rotation((0.1, 0.2, 0.3, 0.9)) == pytest.approx([-0.1, -0.3, -0.2, 0.9])
