"""
Dodge
=====

Single-screen arcade game: steer a circle with your finger (or mouse) and
avoid the squares sliding in from the right. The score counts ticks survived
and drops back to zero on every hit.

All tunable parameters are in game_config.yaml.
"""
