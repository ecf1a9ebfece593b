"""Short-lived visual effects: expanding area rings and travelling projectiles."""

from __future__ import annotations

import math

Color = tuple[int, int, int, int]
Vector = tuple[float, float]

AREA_COLOR: Color = (255, 100, 0, 150)
AREA_MAX_ALPHA = 150
AREA_OUTLINE_THICKNESS = 2.0
AREA_DURATION = 0.5


class AreaAttackEffect:
    """A ring that expands from a centre to a maximum radius while fading out."""

    def __init__(self, center: Vector, max_radius: float, duration: float = AREA_DURATION) -> None:
        self.center = center
        self.max_radius = max_radius
        self.duration = duration
        self.current_radius = 0.0
        self.current_time = 0.0
        self.color: Color = AREA_COLOR

    def is_complete(self) -> bool:
        """Whether the effect has run its full duration."""
        return self.current_time >= self.duration

    def update(self, delta_time: float) -> None:
        """Advance the effect, growing the ring and lowering its opacity."""
        self.current_time += delta_time
        progress = self.current_time / self.duration
        self.current_radius = self.max_radius * progress
        alpha = int(AREA_MAX_ALPHA * (1.0 - progress))
        self.color = (*self.color[:3], min(255, max(0, alpha)))


class ProjectileEffect:
    """A small bar that travels in a straight line from start to end."""

    def __init__(
        self,
        start: Vector,
        end: Vector,
        color: Color,
        speed: float = 600.0,
        width: float = 2.0,
        length: float = 8.0,
    ) -> None:
        self.start = start
        self.end = end
        self.color = color
        self.speed = speed
        self.width = width
        self.length = length
        self.current_position: Vector = start
        self.traveled = 0.0
        dx, dy = end[0] - start[0], end[1] - start[1]
        self.distance = math.hypot(dx, dy)
        self.angle = math.atan2(dy, dx)

    def is_complete(self) -> bool:
        """Whether the projectile has reached its end point."""
        return self.traveled >= self.distance

    @property
    def visible(self) -> bool:
        """Whether the projectile is in flight and should be drawn."""
        return self.traveled > 0 and not self.is_complete()

    def update(self, delta_time: float) -> None:
        """Move the projectile along its line, stopping at the end point."""
        if self.is_complete():
            return
        self.traveled = min(self.traveled + self.speed * delta_time, self.distance)
        fraction = self.traveled / self.distance
        self.current_position = (
            self.start[0] + (self.end[0] - self.start[0]) * fraction,
            self.start[1] + (self.end[1] - self.start[1]) * fraction,
        )