#!/usr/bin/env python3
"""
Example usage of JSON Converters.

This script defines converters for a small user directory, encodes it to
JSON text and decodes it back, then shows how a malformed document is
reported.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from json_converters import (
    ErrorHandler,
    Iso,
    JSONCodec,
    bool_,
    dict_,
    field,
    int_,
    lazy,
    list_,
    map_,
    nullable,
    object_,
    option,
    string,
)


@dataclass
class Profile:
    age: int
    city: str
    interests: List[str]


@dataclass
class User:
    name: str
    email: Optional[str]
    joined: date
    profile: Profile
    manager: Optional["User"] = None


@dataclass
class Directory:
    users: Dict[str, User]
    public: bool


iso_date = map_(Iso(get=date.fromisoformat, reverse_get=date.isoformat), string)

profile = object_(
    Profile,
    field("age", lambda p: p.age, int_),
    field("city", lambda p: p.city, string),
    field("interests", lambda p: p.interests, list_(string)),
)

user = object_(
    User,
    field("name", lambda u: u.name, string),
    field("email", lambda u: u.email, nullable(string)),
    field("joined", lambda u: u.joined, iso_date),
    field("profile", lambda u: u.profile, profile),
    option("manager", lambda u: u.manager, lazy(lambda: user)),
)

directory = object_(
    Directory,
    field("users", lambda d: d.users, dict_(user)),
    field("public", lambda d: d.public, bool_),
)


def main():
    """Main example function."""
    print("JSON Converters Example")
    print("=" * 50)

    alice = User(
        name="Alice Johnson",
        email="alice@example.com",
        joined=date(2021, 3, 14),
        profile=Profile(age=30, city="New York", interests=["reading", "hiking"]),
    )
    bob = User(
        name="Bob Smith",
        email=None,
        joined=date(2023, 7, 1),
        profile=Profile(age=25, city="San Francisco", interests=[]),
        manager=alice,
    )
    data = Directory(users={"user_001": alice, "user_002": bob}, public=True)

    codec = JSONCodec(indent=2)
    text = codec.encode(directory, data)
    print(text)

    result = codec.decode_string(directory, text)
    print(f"\nRound trip successful: {result.success and result.value == data}")

    broken = text.replace('"age": 25', '"age": "twenty-five"')
    result = codec.decode_string(directory, broken)
    print("\nDecoding a broken document:")
    print(ErrorHandler().describe(result.error))


if __name__ == "__main__":
    main()
