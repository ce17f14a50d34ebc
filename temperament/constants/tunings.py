"""Built-in tuning tables.

Every table lists the 12 pitch classes in chromatic order starting at the
tonic C (``C, C#, D, D#, E, F, F#, G, G#, A, A#, B``). Index 0 is always the
unison and is never read by the generator, which writes the tonic itself.

Two encodings are used, matching how each system is published:

- ``*_RATIOS`` - ``(numerator, denominator)`` pairs for systems defined by
  whole-number ratios (5-limit just, Pythagorean, the 7-limit systems).
- ``*_CENTS`` - offsets from C in cents for the tempered systems, rounded to
  0.1 cent as in the historical tables.
"""

import typing


RatioTable = typing.List[typing.Tuple[int, int]]
CentsTable = typing.List[float]


# 5-limit just intonation. C major triad is 1/1, 5/4, 3/2.
JUST_RATIOS: RatioTable = [
	(1, 1),
	(16, 15),
	(9, 8),
	(6, 5),
	(5, 4),
	(4, 3),
	(45, 32),
	(3, 2),
	(8, 5),
	(5, 3),
	(9, 5),
	(15, 8),
]

# Stacked 3/2 fifths, octave-reduced. The wolf falls between G# and D#.
PYTHAGOREAN_RATIOS: RatioTable = [
	(1, 1),
	(256, 243),
	(9, 8),
	(32, 27),
	(81, 64),
	(4, 3),
	(729, 512),
	(3, 2),
	(128, 81),
	(27, 16),
	(16, 9),
	(243, 128),
]

# Fifths narrowed by 1/4 syntonic comma so that C-E is a pure 5/4 (386.3).
QUARTER_COMMA_MEANTONE_CENTS: CentsTable = [
	0.0,
	76.0,
	193.2,
	310.3,
	386.3,
	503.4,
	579.5,
	696.6,
	772.6,
	889.7,
	1006.8,
	1082.9,
]

# Werckmeister (1691): C-G, G-D, D-A and B-F# tempered by 1/4 Pythagorean comma.
WERCKMEISTER_III_CENTS: CentsTable = [
	0.0,
	90.2,
	192.2,
	294.1,
	390.2,
	498.0,
	588.3,
	696.1,
	792.2,
	888.3,
	996.1,
	1092.2,
]

# Kirnberger: pure C-E, the syntonic comma split over C-G-D-A-E.
KIRNBERGER_III_CENTS: CentsTable = [
	0.0,
	90.2,
	193.2,
	294.1,
	386.3,
	498.0,
	590.2,
	696.6,
	792.2,
	889.7,
	996.1,
	1088.3,
]

# La Monte Young's Well-Tuned Piano, transposed from Eb to C.
YOUNG_WELL_TUNED_RATIOS: RatioTable = [
	(1, 1),
	(567, 512),
	(9, 8),
	(147, 128),
	(21, 16),
	(1323, 1024),
	(189, 128),
	(3, 2),
	(49, 32),
	(7, 4),
	(441, 256),
	(63, 32),
]

# Kraig Grady's 7-limit Centaur.
CENTAUR_RATIOS: RatioTable = [
	(1, 1),
	(21, 20),
	(9, 8),
	(7, 6),
	(5, 4),
	(4, 3),
	(7, 5),
	(3, 2),
	(14, 9),
	(5, 3),
	(7, 4),
	(15, 8),
]
