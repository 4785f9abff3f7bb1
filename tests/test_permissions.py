"""Tests for role-hierarchy checks and the debug report."""

from core.permissions import build_permission_report, can_rename, is_manageable
from tests.conftest import BOT_ID, FakeGuild


class TestIsManageable:
    def test_lower_ranked_member(self, alice):
        assert is_manageable(alice)
        assert can_rename(alice)

    def test_equal_rank_is_not_manageable(self, guild):
        peer = guild.add_member(7, "Peer", role_position=10)
        assert not is_manageable(peer)

    def test_owner_is_never_manageable(self, guild):
        owner = guild.add_member(guild.owner_id, "Owner", role_position=0)
        assert not is_manageable(owner)

    def test_bot_itself(self, guild):
        assert not is_manageable(guild.me)

    def test_bot_owning_guild_manages_everyone(self):
        guild = FakeGuild(owner_id=BOT_ID, bot_role_position=0)
        member = guild.add_member(7, "Anyone", role_position=99)
        assert is_manageable(member)

    def test_missing_bot_member(self, guild, alice):
        guild.me = None
        assert not is_manageable(alice)
        assert not can_rename(alice)


class TestPermissionReport:
    def test_manageable_member(self, alice):
        report = build_permission_report(alice, "Europe/London", "14:30")

        assert report.bot_has_manage_nicknames
        assert report.bot_outranks_member
        assert report.recommendation == "Your nickname can be changed by the bot."

        text = report.render()
        assert "- Your current timezone: Europe/London" in text
        assert "- Your current time: 14:30" in text
        assert "- Bot's highest role position: 10" in text

    def test_owner_recommendation(self, guild):
        owner = guild.add_member(guild.owner_id, "Owner", role_position=0)
        report = build_permission_report(owner)

        assert report.member_is_owner
        assert report.bot_outranks_member
        assert "server owner" in report.recommendation

    def test_role_order_recommendation(self, guild):
        boss = guild.add_member(5, "Boss", role_position=20)
        report = build_permission_report(boss)

        assert not report.bot_outranks_member
        assert report.recommendation.startswith("The bot's highest role must be above")

    def test_no_timezone(self, alice):
        text = build_permission_report(alice).render()

        assert "- Your current timezone: Not set" in text
        assert "- Your current time: No timezone set" in text
