"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for agency membership.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def normalize_email(email: str) -> str:
    """Canonical form used for every email comparison."""
    return email.strip().lower()


@dataclass(frozen=True)
class AgencyMembership:
    """An agency an identity may act on.

    Attributes:
        agency_id: Document id of the agency.
        slug: Subdomain slug of the agency; falls back to the id.
        name: Display name of the agency.
    """

    agency_id: str
    slug: str
    name: str = ""

    def matches(self, tenant_id: str) -> bool:
        """True if tenant_id names this agency by id or slug."""
        return tenant_id in (self.agency_id, self.slug)


@dataclass(frozen=True)
class AgencyAccessPolicy:
    """Which identities an agency admits.

    Mirrors an agency's user-access settings: explicit email addresses
    and whole email domains.
    """

    agency_id: str
    slug: str | None = None
    name: str = ""
    authorized_emails: frozenset[str] = field(default_factory=frozenset)
    authorized_domains: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "authorized_emails",
            frozenset(normalize_email(e) for e in self.authorized_emails),
        )
        object.__setattr__(
            self,
            "authorized_domains",
            frozenset(d.strip().lower().lstrip("@") for d in self.authorized_domains),
        )

    def admits(self, email: str) -> bool:
        """True if the email is listed explicitly or by domain."""
        normalized = normalize_email(email)
        if normalized in self.authorized_emails:
            return True
        _, _, domain = normalized.rpartition("@")
        return bool(domain) and domain in self.authorized_domains

    def to_membership(self) -> AgencyMembership:
        return AgencyMembership(
            agency_id=self.agency_id,
            slug=self.slug or self.agency_id,
            name=self.name,
        )
