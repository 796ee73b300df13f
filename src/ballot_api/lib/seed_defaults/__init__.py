"""Seed defaults library: the community's standard zones and elections."""

from ballot_api.lib.seed_defaults.defaults import DEFAULT_ELECTIONS, DEFAULT_ZONES, ElectionSeed, ZoneSeed

__all__ = ["DEFAULT_ELECTIONS", "DEFAULT_ZONES", "ElectionSeed", "ZoneSeed"]
