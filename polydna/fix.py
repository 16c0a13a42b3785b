"""Fixing coding sequences for synthesis by swapping in synonymous codons.

A problem finder is a callable that takes a DNA sequence and yields
``DnaSuggestion`` objects describing a codon range to change, the direction
in which GC content should move (``"NA"``, ``"GC"`` or ``"AT"``) and how many
codons must change to fix the problem. ``fix_cds`` runs the finders
repeatedly, each time applying the best-weighted synonymous codon changes,
until no finder reports a problem.
"""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

from polydna.codon import CodonTable
from polydna.transform import reverse_complement

__all__ = [
    "DnaSuggestion",
    "Change",
    "FixError",
    "ProblemFinder",
    "remove_sequence",
    "remove_repeat",
    "gc_content_fixer",
    "find_problems",
    "fix_cds",
    "fix_cds_simple",
]

_CODON_LENGTH = 3
_BIASES = ("NA", "GC", "AT")


class FixError(ValueError):
    """Raised when a coding sequence cannot be fixed."""


@dataclass(frozen=True)
class DnaSuggestion:
    """A codon range to change, the GC bias to apply and the number of fixes."""

    start: int
    end: int
    bias: str
    quantity_fixes: int
    suggestion_type: str


@dataclass(frozen=True)
class Change:
    """A single codon substitution made while fixing a sequence."""

    position: int
    step: int
    from_codon: str
    to_codon: str
    reason: str


ProblemFinder = Callable[[str], Iterable[DnaSuggestion]]


def remove_sequence(sequences_to_remove: Iterable[str], reason: str) -> ProblemFinder:
    """Return a finder for the given patterns and their reverse complements."""
    patterns = list(sequences_to_remove)

    def finder(sequence: str) -> Iterator[DnaSuggestion]:
        for pattern in patterns:
            for site in (pattern, reverse_complement(pattern)):
                for match in re.finditer(site, sequence):
                    yield DnaSuggestion(
                        match.start() // _CODON_LENGTH,
                        match.end() // _CODON_LENGTH - 1,
                        "NA",
                        1,
                        reason,
                    )

    return finder


def remove_repeat(repeat_length: int) -> ProblemFinder:
    """Return a finder for repeated k-mers (forward or reverse complement)."""

    def finder(sequence: str) -> Iterator[DnaSuggestion]:
        seen: set[str] = set()
        position = 0
        while position < len(sequence) - repeat_length:
            kmer = sequence[position : position + repeat_length]
            repeated = kmer in seen or reverse_complement(kmer) in seen
            seen.add(kmer)
            if repeated:
                leftover = position % _CODON_LENGTH
                end = (position + repeat_length) // _CODON_LENGTH
                if leftover != 0:
                    end -= 1
                yield DnaSuggestion(
                    position // _CODON_LENGTH, end, "NA", 1, "Repeat sequence"
                )
                position += leftover
            position += 1

    return finder


def _gc_content(sequence: str) -> float:
    upper = sequence.upper()
    return (upper.count("G") + upper.count("C")) / len(upper)


def gc_content_fixer(upper_bound: float, lower_bound: float) -> ProblemFinder:
    """Return a finder that flags GC content outside the given bounds."""

    def finder(sequence: str) -> Iterator[DnaSuggestion]:
        gc_content = _gc_content(sequence)
        last_codon = len(sequence) // _CODON_LENGTH - 1
        if gc_content > upper_bound:
            fixes = int((gc_content - upper_bound) * len(sequence)) + 1
            yield DnaSuggestion(0, last_codon, "AT", fixes, "GcContent too high")
        if gc_content < lower_bound:
            fixes = int((lower_bound - gc_content) * len(sequence)) + 1
            yield DnaSuggestion(0, last_codon, "GC", fixes, "GcContent too low")

    return finder


def find_problems(
    sequence: str, problem_finders: Iterable[ProblemFinder]
) -> list[DnaSuggestion]:
    """Run every finder on ``sequence`` and return all their suggestions."""
    return [
        suggestion for finder in problem_finders for suggestion in finder(sequence)
    ]


def _gc_count(triplet: str) -> int:
    return triplet.count("G") + triplet.count("C")


def fix_cds(
    sequence: str,
    codon_table: CodonTable,
    problem_finders: Sequence[ProblemFinder],
) -> tuple[str, list[Change]]:
    """Fix a CDS with synonymous codons until no finder reports a problem.

    Returns the fixed sequence and the changes made, ordered by step and
    position. Raises FixError for an incomplete CDS, an incomplete codon
    table, an invalid bias, or a problem that cannot be fixed.
    """
    if len(sequence) % _CODON_LENGTH != 0:
        raise FixError(
            "this sequence isn't a complete CDS, please try to use a CDS "
            "without interrupted codons"
        )

    bias_maps: dict[str, defaultdict[str, list[str]]] = {
        bias: defaultdict(list) for bias in _BIASES
    }
    weight_map: dict[str, float] = {}
    for amino_acid in codon_table.amino_acids:
        total = 0
        for codon in amino_acid.codons:
            total += codon.weight
            codon_bias = _gc_count(codon.triplet)
            for other in amino_acid.codons:
                if other.triplet == codon.triplet:
                    continue
                other_bias = _gc_count(other.triplet)
                if codon_bias > other_bias:
                    bias_maps["AT"][codon.triplet].append(other.triplet)
                elif codon_bias < other_bias:
                    bias_maps["GC"][codon.triplet].append(other.triplet)
                bias_maps["NA"][codon.triplet].append(other.triplet)
        if total == 0:
            raise FixError("incomplete codon table")
        for codon in amino_acid.codons:
            weight_map[codon.triplet] = 100 * codon.weight / total

    history = [
        [sequence[start : start + _CODON_LENGTH]]
        for start in range(0, len(sequence), _CODON_LENGTH)
    ]

    changes: list[Change] = []
    step = 0
    while True:
        suggestions = find_problems(sequence, problem_finders)
        if not suggestions:
            changes.sort(key=lambda change: (change.step, change.position))
            return sequence, changes

        for suggestion in suggestions:
            if suggestion.bias not in _BIASES:
                raise FixError(
                    f"Invalid bias. Expected NA, GC, or AT, got {suggestion.bias}"
                )
            bias_map = bias_maps[suggestion.bias]

            potential: list[Change] = []
            for position in range(
                max(suggestion.start, 0), min(suggestion.end + 1, len(history))
            ):
                codon_history = history[position]
                last_codon = codon_history[-1]
                unavailable = set(codon_history)
                potential.extend(
                    Change(position, step, last_codon, candidate, suggestion.suggestion_type)
                    for candidate in bias_map.get(last_codon, [])
                    if candidate not in unavailable
                )

            potential.sort(key=lambda change: weight_map.get(change.to_codon, 0.0), reverse=True)

            used_positions: set[int] = set()
            best: list[Change] = []
            for change in potential:
                if change.position not in used_positions:
                    used_positions.add(change.position)
                    best.append(change)

            if len(best) < suggestion.quantity_fixes:
                raise FixError(
                    f"Too many fixes required. Number of potential fixes: "
                    f"{len(potential)} , number of required fixes: "
                    f"{suggestion.quantity_fixes}"
                )

            for change in best[: suggestion.quantity_fixes]:
                history[change.position].append(change.to_codon)
                changes.append(change)
            sequence = "".join(codons[-1] for codons in history)
        step += 1


def fix_cds_simple(
    sequence: str, codon_table: CodonTable, sequences_to_remove: Iterable[str]
) -> tuple[str, list[Change]]:
    """Fix a CDS with default finders.

    Removes 8-base A/G homopolymers, the given sequences, repeats of 18
    bases, and GC content above 80% or below 20%.
    """
    finders = [
        remove_sequence(["AAAAAAAA", "GGGGGGGG"], "Homopolymers"),
        remove_sequence(sequences_to_remove, "Removal requested by user"),
        remove_repeat(18),
        gc_content_fixer(0.80, 0.20),
    ]
    return fix_cds(sequence, codon_table, finders)