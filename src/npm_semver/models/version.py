"""Version value objects."""

from __future__ import annotations

from dataclasses import dataclass


def format_version(major: int, minor: int, patch: int, prerelease: tuple[str, ...] = ()) -> str:
    base = f"{major}.{minor}.{patch}"
    if prerelease:
        return f"{base}-{'.'.join(prerelease)}"
    return base


@dataclass(frozen=True, slots=True)
class Version:
    """A parsed semantic version.

    ``prerelease`` holds the dot-separated identifiers after ``-``; build
    metadata is never stored because it does not take part in precedence.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError("Version components must be non-negative")

    def __str__(self) -> str:
        return self.version

    @property
    def version(self) -> str:
        """Canonical text, e.g. ``1.2.3`` or ``1.2.3-beta.1``."""
        return format_version(self.major, self.minor, self.patch, self.prerelease)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def increment_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)

    def increment_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def increment_major(self) -> Version:
        return Version(self.major + 1, 0, 0)


ZERO = Version(0, 0, 0)


@dataclass(frozen=True, slots=True)
class WildcardVersion:
    """A version body from a range, where any component may be unset.

    Unset components come from ``x``, ``X``, ``*`` or from being omitted
    altogether (``1.2`` leaves ``patch`` unset). An empty body yields the
    unconstrained marker with every component unset.
    """

    major: int | None
    minor: int | None
    patch: int | None
    prerelease: tuple[str, ...] = ()

    @property
    def has_wildcard(self) -> bool:
        return self.major is None or self.minor is None or self.patch is None

    @property
    def is_any(self) -> bool:
        return self.major is None

    def normalized(self) -> Version:
        """Return the lowest version matched, with unset components as 0."""
        return Version(
            self.major or 0,
            self.minor or 0,
            self.patch or 0,
            self.prerelease,
        )

    def caret_upper_bound(self) -> Version:
        """Exclusive upper edge of ``^body``: bump the left-most non-zero part."""
        base = self.normalized()
        if base.major > 0:
            return base.increment_major()
        if base.minor > 0:
            return base.increment_minor()
        return base.increment_patch()

    def tilde_upper_bound(self) -> Version:
        """Exclusive upper edge of ``~body``: minor-scoped when minor was given."""
        base = self.normalized()
        if self.minor is not None:
            return base.increment_minor()
        return base.increment_major()

    def wildcard_upper_bound(self) -> Version | None:
        """Exclusive upper edge implied by the first unset component.

        Returns None when the major itself is unset, since no bound exists.
        """
        if self.major is None:
            return None
        base = self.normalized()
        if self.minor is None:
            return base.increment_major()
        if self.patch is None:
            return base.increment_minor()
        return base.increment_patch()
