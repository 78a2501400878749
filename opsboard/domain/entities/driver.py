"""Driver entity — a person who may be operating a load."""

from dataclasses import dataclass, field


@dataclass
class Driver:
    id: str
    org_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    code: str | None = None
    status: str | None = None
    extra: dict = field(default_factory=dict)

    def full_name(self) -> str:
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "org_id": self.org_id,
                "first_name": self.first_name,
                "last_name": self.last_name,
                "code": self.code,
                "status": self.status,
            }
        )
        return data
