"""
Nickname permission checks for Timezone Bot.

Discord only lets a bot rename members ranked strictly below its own top role,
and never the server owner.
"""
from dataclasses import dataclass
from typing import Optional

import discord


# =============================================================================
# Permission Checking
# =============================================================================

def is_manageable(member: discord.Member) -> bool:
    """
    Check whether the bot outranks a member in the role hierarchy.

    Args:
        member: The Discord member to check

    Returns:
        True if the bot may manage this member
    """
    guild = member.guild
    me = guild.me
    if me is None:
        return False

    if member.id == guild.owner_id:
        return False
    if member.id == me.id:
        return False
    if me.id == guild.owner_id:
        return True

    return me.top_role.position > member.top_role.position


def can_rename(member: discord.Member) -> bool:
    """True if the bot holds Manage Nicknames and outranks ``member``."""
    me = member.guild.me
    if me is None or not me.guild_permissions.manage_nicknames:
        return False
    return is_manageable(member)


# =============================================================================
# Diagnostics
# =============================================================================

@dataclass
class PermissionReport:
    """Snapshot of everything that decides whether a member can be renamed."""
    bot_has_manage_nicknames: bool
    bot_top_role_position: int
    member_top_role_position: int
    member_is_owner: bool
    manageable: bool
    timezone: Optional[str] = None
    current_time: Optional[str] = None

    @property
    def bot_outranks_member(self) -> bool:
        return self.bot_top_role_position > self.member_top_role_position

    @property
    def recommendation(self) -> str:
        if self.manageable:
            return "Your nickname can be changed by the bot."
        if self.member_is_owner:
            return "You are the server owner. Discord doesn't allow bots to change the owner's nickname."
        return "The bot's highest role must be above your highest role in the server settings."

    def render(self) -> str:
        return (
            "**Discord Permission Debug:**\n"
            f"- Bot has MANAGE_NICKNAMES permission: {self.bot_has_manage_nicknames}\n"
            f"- Bot's highest role position: {self.bot_top_role_position}\n"
            f"- Your highest role position: {self.member_top_role_position}\n"
            f"- Bot's role is higher than yours: {self.bot_outranks_member}\n"
            f"- You are the server owner: {self.member_is_owner}\n"
            f"- Your nickname is manageable by bot: {self.manageable}\n"
            f"- Your current timezone: {self.timezone or 'Not set'}\n"
            f"- Your current time: {self.current_time or 'No timezone set'}\n\n"
            f"**Recommendation:** {self.recommendation}"
        )


def build_permission_report(
    member: discord.Member,
    timezone: Optional[str] = None,
    current_time: Optional[str] = None
) -> PermissionReport:
    """Collect the rename-related permission state for ``member``."""
    me = member.guild.me
    return PermissionReport(
        bot_has_manage_nicknames=me.guild_permissions.manage_nicknames,
        bot_top_role_position=me.top_role.position,
        member_top_role_position=member.top_role.position,
        member_is_owner=member.guild.owner_id == member.id,
        manageable=is_manageable(member),
        timezone=timezone,
        current_time=current_time,
    )
