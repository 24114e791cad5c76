"""Extract the owning character and enchantment table from an item page."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

UNKNOWN_CHARACTER = "Unknown"


@dataclass(frozen=True)
class EnchantmentEntry:
    name: str
    effect: str


@dataclass(frozen=True)
class ItemEnchantments:
    character_name: str = UNKNOWN_CHARACTER
    entries: list[EnchantmentEntry] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]


def parse_page(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_character(soup: BeautifulSoup) -> str:
    """Name under the first "Collection" heading of the infobox sidebar."""
    for aside in soup.find_all("aside"):
        for heading in aside.find_all(["h2", "h3"]):
            if "collection" not in heading.get_text().lower():
                continue
            sibling = heading.find_next_sibling()
            name = sibling.get_text().strip() if sibling else ""
            if name:
                return name
    return UNKNOWN_CHARACTER


def extract_entries(soup: BeautifulSoup) -> list[EnchantmentEntry]:
    """Rows of the first table captioned "Enchantments", in document order."""
    for table in soup.find_all("table"):
        caption = table.find("caption")
        if not caption or "enchantment" not in caption.get_text().lower():
            continue

        entries: list[EnchantmentEntry] = []
        for row in table.find_all("tr"):
            cells = row.find_all("td")
            if len(cells) < 2:
                continue
            entries.append(EnchantmentEntry(
                name=cells[0].get_text().strip(),
                effect=cells[1].get_text().strip(),
            ))
        return entries
    return []


def extract_enchantments(soup: BeautifulSoup) -> ItemEnchantments:
    return ItemEnchantments(character_name=extract_character(soup), entries=extract_entries(soup))
