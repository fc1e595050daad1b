#!/usr/bin/env python3
"""
Quick utility script to validate the letter files written by an indexing run.

Checks that all 26 files exist, every line is well formed, every word sits in
the file of its first letter, lines are sorted by document count (descending)
then word, and document ids are strictly ascending.

Usage:
    python3 scripts/check_output.py [--output-dir .]
"""

import os
import re
import sys
import argparse
from typing import Dict, List, Tuple

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
LINE_RE = re.compile(r'^([a-z]+):\[(\d+(?: \d+)*)\]$')


def parse_letter_file(path: str) -> List[Tuple[str, List[int]]]:
    """
    Parse one output file

    Raises:
        ValueError: If a line does not match 'word:[id id ...]'
    """
    entries = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f, start=1):
            match = LINE_RE.match(line.rstrip('\n'))
            if not match:
                raise ValueError(f"{path}:{line_num}: malformed line {line!r}")
            entries.append((match.group(1), [int(x) for x in match.group(2).split(' ')]))
    return entries


def validate_output_dir(output_dir: str) -> List[str]:
    """
    Validate every letter file in a directory.

    Returns:
        List of problems found (empty when the output is valid)
    """
    problems = []

    for letter in ALPHABET:
        path = os.path.join(output_dir, f"{letter}.txt")
        if not os.path.exists(path):
            problems.append(f"missing {letter}.txt")
            continue

        try:
            entries = parse_letter_file(path)
        except ValueError as e:
            problems.append(str(e))
            continue

        for word, doc_ids in entries:
            if word[0] != letter:
                problems.append(f"{letter}.txt: '{word}' belongs in {word[0]}.txt")
            if any(a >= b for a, b in zip(doc_ids, doc_ids[1:])):
                problems.append(f"{letter}.txt: ids of '{word}' not strictly ascending: {doc_ids}")

        for (w1, ids1), (w2, ids2) in zip(entries, entries[1:]):
            if (-len(ids1), w1) >= (-len(ids2), w2):
                problems.append(f"{letter}.txt: '{w1}' ({len(ids1)}) listed before '{w2}' ({len(ids2)})")

    return problems


def load_index(output_dir: str) -> Dict[str, List[int]]:
    """Read all letter files back into a single word -> ids mapping."""
    index = {}
    for letter in ALPHABET:
        for word, doc_ids in parse_letter_file(os.path.join(output_dir, f"{letter}.txt")):
            index[word] = doc_ids
    return index


def main():
    parser = argparse.ArgumentParser(description='Validate indexer output files')
    parser.add_argument('--output-dir', default='.', help='Directory containing a.txt .. z.txt')
    args = parser.parse_args()

    problems = validate_output_dir(args.output_dir)
    if problems:
        print(f"❌ Found {len(problems)} problem(s):")
        for problem in problems:
            print(f"   {problem}")
        return 1

    index = load_index(args.output_dir)
    print(f"✅ Output in {args.output_dir} is valid ({len(index)} words)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
