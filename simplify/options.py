"""
Knobs a host may turn. The defaults reproduce the conventional output:
a nested `Simplified` enum and a `simplified` projection, both annotated.
"""
from typing import NamedTuple

class Options(NamedTuple):
	type_name: str = "Simplified"
	projection_name: str = "simplified"
	conformances: tuple[str, ...] = ("Int", "CaseIterable", "Hashable")
	alias_prefix: str = "AnonymousFunc_"
	annotate: bool = True  # Trailing comments naming each variant's payload
	align: bool = True     # Line those comments up by the longest variant name
	equality_helper: bool = False
	helper_name: str = "isEqualSimplified"
	attribute: str = "Simplified"  # How a host marks declarations for expansion

DEFAULT = Options()
