"""Functional role registry."""

import re
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

_EC_NUMBER = re.compile(r"\s*\((?:EC|TC)\s+[\d\-.a-z]+\)", re.IGNORECASE)
_NON_WORD = re.compile(r"[^a-z0-9]+")
_WORD = re.compile(r"[A-Za-z0-9]+")

MAX_ID_WORDS = 5
PREFIX_LENGTH = 4


@dataclass(frozen=True)
class Role:
    """
    Functional role.

    Attributes:
        id: Short mnemonic identifier (e.g. 'PhenTrnaSyntAlph')
        name: Role name as first encountered
    """

    id: str
    name: str


def normalize_role(name: str) -> str:
    """
    Matching key for a role name.

    Case, punctuation, spacing and EC/TC numbers are ignored so that
    trivial variations of a role name map to the same role.
    """
    key = _EC_NUMBER.sub("", name).lower()
    return _NON_WORD.sub(" ", key).strip()


class RoleMap:
    """
    Incrementally built map between role names and role IDs.

    Roles are added as they are encountered. The ID is minted from the
    capitalized four-letter prefixes of the first words of the name and
    made unique with a numeric suffix.
    """

    def __init__(self):
        self._by_key: Dict[str, Role] = {}
        self._by_id: Dict[str, Role] = {}

    def _mint_id(self, name: str) -> str:
        words = _WORD.findall(_EC_NUMBER.sub("", name))[:MAX_ID_WORDS]
        base = "".join(w[:PREFIX_LENGTH].capitalize() for w in words) or "Role"
        role_id = base
        suffix = 1
        while role_id in self._by_id:
            suffix += 1
            role_id = f"{base}{suffix}"
        return role_id

    def find(self, name: str) -> Optional[Role]:
        return self._by_key.get(normalize_role(name))

    def find_or_insert(self, name: str) -> Role:
        """
        Return the role with the given name, registering it if it is new.

        Args:
            name: Role name

        Returns:
            Matching Role
        """
        key = normalize_role(name)
        role = self._by_key.get(key)
        if role is None:
            role = Role(id=self._mint_id(name), name=name.strip())
            self._by_key[key] = role
            self._by_id[role.id] = role
        return role

    def get(self, role_id: str) -> Optional[Role]:
        return self._by_id.get(role_id)

    def name(self, role_id: str) -> str:
        """Name of a role, or an empty string if the ID is unknown."""
        role = self._by_id.get(role_id)
        return role.name if role is not None else ""

    def __contains__(self, role_id: str) -> bool:
        return role_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Role]:
        return iter(self._by_id.values())
