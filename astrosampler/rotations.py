"""
Coordinate frame rotations used to orient an orbit in space.

The perifocal-to-ecliptic transform is built as the 3-1-3 composition of
elementary rotations rather than as a hand-expanded expression, so each
factor can be checked on its own.
"""
import jax.numpy as jnp
from jax import jit


@jit
def rot_x(angle: float) -> jnp.ndarray:
    """
    Active rotation matrix about the x axis.

    Args:
        angle: Rotation angle (radians)

    Returns:
        3x3 rotation matrix
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


@jit
def rot_z(angle: float) -> jnp.ndarray:
    """
    Active rotation matrix about the z axis.

    Args:
        angle: Rotation angle (radians)

    Returns:
        3x3 rotation matrix
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


@jit
def perifocal_to_ecliptic(i: float, om: float, w: float) -> jnp.ndarray:
    """
    Rotation matrix from the perifocal frame to the heliocentric ecliptic frame.

    The ellipse is first rotated by the argument of periapsis about the orbit
    normal, then tilted by the inclination about the line of nodes, and finally
    rotated by the longitude of the ascending node about the ecliptic pole:

        R = Rz(om) @ Rx(i) @ Rz(w)

    Args:
        i: Inclination (radians)
        om: Longitude of the ascending node (radians)
        w: Argument of periapsis (radians)

    Returns:
        3x3 rotation matrix whose first two columns are the P and Q unit
        vectors expressed in the ecliptic frame.
    """
    return rot_z(om) @ rot_x(i) @ rot_z(w)


def ecliptic_to_visualization(r: jnp.ndarray, scale: float) -> jnp.ndarray:
    """
    Map ecliptic positions into the "Y is up" visualization frame.

    Physical y and z are swapped and the new z is negated, then everything is
    scaled: (x, y, z) -> (x * scale, z * scale, -y * scale).

    Args:
        r: Positions of shape (..., 3) in AU
        scale: Visualization units per AU

    Returns:
        Positions of the same shape in visualization units
    """
    x, y, z = r[..., 0], r[..., 1], r[..., 2]
    return jnp.stack([x * scale, z * scale, -y * scale], axis=-1)
