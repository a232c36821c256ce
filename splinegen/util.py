import math

EPSILON = 1e-12


def epsilon_equals(a: float, b: float, epsilon: float = EPSILON) -> bool:
    return a - epsilon <= b and a + epsilon >= b


def limit(v: float, low: float, high: float) -> float:
    """Clamp v into [low, high]."""
    return min(high, max(low, v))


def interpolate(a: float, b: float, x: float) -> float:
    """Linear interpolation between a and b, x is clamped to [0, 1]."""
    x = limit(x, 0.0, 1.0)
    return a + (b - a) * x


def all_close_to(values, value: float, epsilon: float = EPSILON) -> bool:
    return all(epsilon_equals(v, value, epsilon) for v in values)


def deg2rad(deg):
    return deg / 180.0 * math.pi


def rad2deg(rad):
    return rad * 180.0 / math.pi
