"""Shared fixtures and Discord fakes for tests."""

import socket
from pathlib import Path
from types import SimpleNamespace
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from core.store import TimezoneStore

BOT_ID = 999
OWNER_ID = 1
GUILD_ID = 4242


class FakeMember:
    """Just enough of discord.Member for renaming and permission checks."""

    def __init__(self, member_id: int, display_name: str, guild, role_position: int = 1, bot: bool = False):
        self.id = member_id
        self.display_name = display_name
        self.guild = guild
        self.bot = bot
        self.top_role = SimpleNamespace(position=role_position)
        self.guild_permissions = SimpleNamespace(manage_nicknames=False)
        self.edit = AsyncMock(side_effect=self._edit)

    async def _edit(self, nick: Optional[str] = None, reason: Optional[str] = None):
        self.display_name = nick

    def __str__(self) -> str:
        return self.display_name


class FakeGuild:
    def __init__(self, owner_id: int = OWNER_ID, bot_role_position: int = 10, manage_nicknames: bool = True):
        self.id = GUILD_ID
        self.owner_id = owner_id
        self.members = {}
        self.me = FakeMember(BOT_ID, "TimezoneBot", self, role_position=bot_role_position, bot=True)
        self.me.guild_permissions.manage_nicknames = manage_nicknames

    def add_member(self, member_id: int, display_name: str, role_position: int = 1) -> FakeMember:
        member = FakeMember(member_id, display_name, self, role_position=role_position)
        self.members[member_id] = member
        return member

    def get_member(self, member_id: int) -> Optional[FakeMember]:
        return self.members.get(member_id)


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def make_message(author, content: str, guild: Optional[FakeGuild] = None):
    return SimpleNamespace(
        author=author,
        guild=guild,
        content=content,
        channel=SimpleNamespace(id=7),
        reply=AsyncMock(),
    )


def replied_text(message) -> str:
    """The content of the single reply sent to ``message``."""
    message.reply.assert_awaited_once()
    return message.reply.await_args.args[0]


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "timezones.json"


@pytest.fixture
def store(store_path: Path) -> TimezoneStore:
    return TimezoneStore(store_path)


@pytest.fixture
def guild() -> FakeGuild:
    return FakeGuild()


@pytest.fixture
def alice(guild: FakeGuild) -> FakeMember:
    return guild.add_member(100, "Alice")
