"""Configuration for pinlayout: constants, settings and the rules file."""
