"""
Colors to Collect
=================

A falling-block color-matching arcade game. The player drags a paddle
along the bottom of the screen and taps to cycle its color; catching a
block of the paddle's color scores a point, catching any other color
ends the game.

The game core is headless and host-driven; see colors_to_collect.core.
All tunable parameters are in game_config.yaml.
"""
