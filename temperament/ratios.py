"""Conversion between frequency ratios and cents.

A pitch deviation has two native encodings: a just-intonation ratio
``numerator/denominator`` and a logarithmic cents value (1200 per octave).
These helpers convert between them and parse ratio text typed into a form.

None of them raise on malformed input. They sit on live-editing paths, so bad
values degrade to the unison (``1/1``, 0 cents) instead.
"""

import math
import typing

import temperament.constants.reference


Ratio = typing.Tuple[int, int]

UNISON: Ratio = (1, 1)


def ratio_to_cents (numerator: float, denominator: float) -> float:

	"""
	Return the size of ``numerator/denominator`` in cents.

	``ratio_to_cents(d, n) == -ratio_to_cents(n, d)``. Non-positive terms
	have no pitch meaning and return 0.0.

	Example:
		```python
		ratio_to_cents(3, 2)  # → 701.955...
		ratio_to_cents(5, 4)  # → 386.313...
		```
	"""

	if numerator <= 0 or denominator <= 0:
		return 0.0

	if numerator == denominator:
		return 0.0

	return temperament.constants.reference.CENTS_PER_OCTAVE * math.log2(numerator / denominator)


def cents_to_ratio (cents: float) -> Ratio:

	"""
	Approximate a cents value with a whole-number ratio.

	Ratios below 10 are rationalised with a continued-fraction expansion of at
	most 10 terms, stopping as soon as a convergent lands within ``1e-6`` of the
	target. Larger ratios fall back to a decimal approximation over 100.

	The result is approximate: it is not guaranteed to be in lowest terms or to
	be the best approximation for its size.

	Parameters:
		cents: Interval size in cents. Non-finite values, and values so
			negative that the ratio underflows to zero, return ``(1, 1)``.

	Returns:
		``(numerator, denominator)``, both positive.

	Example:
		```python
		n, d = cents_to_ratio(702)
		n / d  # → 1.5003...
		```
	"""

	if not math.isfinite(cents):
		return UNISON

	target = 2.0 ** (cents / temperament.constants.reference.CENTS_PER_OCTAVE)
	tolerance = temperament.constants.reference.RATIO_TOLERANCE

	if abs(target - 1.0) < tolerance:
		return UNISON

	if target >= temperament.constants.reference.CONTINUED_FRACTION_LIMIT:
		return _decimal_ratio(target)

	# Convergents p_k/q_k seeded with p_-2/q_-2 = 0/1 and p_-1/q_-1 = 1/0.
	p_prev, p = 0, 1
	q_prev, q = 1, 0
	remainder = target

	for _ in range(temperament.constants.reference.CONTINUED_FRACTION_MAX_TERMS):

		term = math.floor(remainder)
		p_prev, p = p, term * p + p_prev
		q_prev, q = q, term * q + q_prev

		if p > 0 and abs(p / q - target) < tolerance:
			break

		fraction = remainder - term

		if fraction <= 0:
			break

		remainder = 1.0 / fraction

	# A target that underflows to zero never leaves the 0/1 convergent.
	if p <= 0:
		return UNISON

	return (p, q)


def _decimal_ratio (value: float) -> Ratio:

	"""
	Express a large ratio as ``n/1`` when it is whole to 3 decimals, else ``n/100``.
	"""

	if round(value, 3) == round(value):
		return (int(round(value)), 1)

	return (int(round(value * 100)), 100)


def parse_ratio_string (text: str) -> Ratio:

	"""
	Parse ratio text such as ``"3/2"`` or ``" 16 / 9 "``.

	Returns ``(1, 1)`` for anything that is not two positive integers separated
	by a single slash: empty text, ``"3"``, ``"a/b"``, ``"3/0"``.
	"""

	if not text or "/" not in text:
		return UNISON

	parts = text.split("/")

	if len(parts) != 2:
		return UNISON

	try:
		numerator = int(parts[0].strip())
		denominator = int(parts[1].strip())
	except ValueError:
		return UNISON

	if numerator <= 0 or denominator <= 0:
		return UNISON

	return (numerator, denominator)


def format_ratio (numerator: int, denominator: int) -> str:

	"""
	Return the display form ``"n/d"``.
	"""

	return f"{numerator}/{denominator}"
