"""Closed id universes for categories and tags.

The universes are plain values handed to the schema layer through the
pydantic validation context, so a test (or another storefront) can swap in
its own set of ids without touching module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IdUniverse:
    """A closed, named set of valid ids."""

    name: str
    ids: frozenset[str]

    def __contains__(self, value: object) -> bool:
        return value in self.ids

    def __iter__(self):
        return iter(sorted(self.ids))

    def __len__(self) -> int:
        return len(self.ids)

    def require(self, value: str) -> str:
        """Return *value* if it belongs to the universe, else raise ValueError.

        Raises ValueError (not a domain exception) on purpose: it is called
        from pydantic validators, which turn it into a field error.
        """
        if value not in self.ids:
            raise ValueError(f"'{value}' is not a known {self.name} id")
        return value

    @staticmethod
    def of(name: str, ids) -> IdUniverse:
        return IdUniverse(name=name, ids=frozenset(ids))


CATEGORY_IDS = IdUniverse.of(
    "category",
    [
        "ai-mastery",
        "ai-tools",
        "bundles",
        "coaching",
        "community",
        "content-creation",
        "courses",
        "dev-and-it",
        "free",
        "guides",
        "journaling",
        "kits-and-templates",
        "knowledge-bases",
        "knowledge-management",
        "knowledge-work",
        "learning",
        "obsidian",
        "personal-development",
        "personal-organization",
        "productivity",
        "services",
        "tools",
        "workshops",
    ],
)

TAG_IDS = IdUniverse.of(
    "tag",
    [
        "ai",
        "ai-assistants",
        "ai-prompts",
        "automation",
        "beginner",
        "bundle",
        "career-development",
        "chatgpt",
        "checklist",
        "clarity",
        "claude",
        "coaching",
        "community",
        "concepts",
        "content-creation",
        "courses",
        "curated",
        "design-thinking",
        "directory",
        "focus",
        "free-guide",
        "free-resource",
        "getting-started",
        "ghostwriting",
        "goals",
        "gtd",
        "habits",
        "ikigai",
        "interstitial-journaling",
        "it-fundamentals",
        "johnny-decimal",
        "journaling",
        "knowledge-management",
        "knowledge-work",
        "lead-magnet",
        "learning",
        "life-design",
        "lifetime-access",
        "llms",
        "markdown",
        "master-prompts",
        "mcp",
        "mindfulness",
        "model-context-protocol",
        "note-taking",
        "obsidian",
        "offline",
        "para",
        "para-method",
        "periodic-reviews",
        "personal-brand",
        "personal-knowledge-management",
        "personal-manifesto",
        "personal-organization",
        "pkm",
        "privacy",
        "productivity",
        "programming",
        "prompt-engineering",
        "reference",
        "resources",
        "routines",
        "second-brain",
        "smart-goals",
        "speech-recognition",
        "system-building",
        "systems",
        "templates",
        "time-management",
        "tools",
        "values",
        "visual-learning",
        "voice-to-text",
        "wall-chart",
        "writing",
        "zen-productivity",
        "zettelkasten",
    ],
)


@dataclass(frozen=True)
class CatalogUniverse:
    """The id universes a catalog snapshot is validated against."""

    categories: IdUniverse = field(default=CATEGORY_IDS)
    tags: IdUniverse = field(default=TAG_IDS)


DEFAULT_UNIVERSE = CatalogUniverse()


def universe_from_context(context: object) -> CatalogUniverse:
    """Pick the universe out of a pydantic validation context."""
    if isinstance(context, dict):
        universe = context.get("universe")
        if isinstance(universe, CatalogUniverse):
            return universe
    return DEFAULT_UNIVERSE
