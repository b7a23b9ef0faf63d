"""Static list of support organisations and the resource hub filter."""

from dataclasses import dataclass

ALL = "all"
MODALITIES = ("call", "chat")
TIMINGS = ("24/7", "daytime")


@dataclass(frozen=True)
class Resource:
    name: str
    description: str
    modalities: frozenset[str]
    timing: str
    website: str
    whatsapp: str | None = None


RESOURCES = (
    Resource(
        name="Vandrevala Foundation",
        description=(
            "24/7 helpline providing emotional support and mental health guidance. "
            "Now available on WhatsApp chat as well!"
        ),
        modalities=frozenset({"call", "chat"}),
        timing="24/7",
        website="https://www.vandrevalafoundation.com",
    ),
    Resource(
        name="iCALL Helpline (TISS)",
        description="Professional counseling service by trained volunteers",
        modalities=frozenset({"call", "chat"}),
        timing="daytime",
        website="https://icall.org",
    ),
    Resource(
        name="Mitram Foundation",
        description="Support for LGBTQ+ individuals and mental health awareness",
        modalities=frozenset({"call", "chat"}),
        timing="daytime",
        website="https://mitramfoundation.org",
    ),
    Resource(
        name="The Humsafar Trust",
        description="Comprehensive support services for LGBTQ+ community",
        modalities=frozenset({"call", "chat"}),
        timing="daytime",
        website="https://humsafar.org",
    ),
)


def filter_resources(
    modality: str = ALL,
    timing: str = ALL,
    resources: tuple[Resource, ...] = RESOURCES,
) -> list[Resource]:
    """Resources offering `modality` at `timing`; "all" matches anything."""
    return [
        r for r in resources
        if (modality == ALL or modality in r.modalities)
        and (timing == ALL or r.timing == timing)
    ]
