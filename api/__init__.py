"""GuildPilot HTTP service."""
