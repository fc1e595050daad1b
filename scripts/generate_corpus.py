#!/usr/bin/env python3
"""
Generate a synthetic document corpus plus manifest for benchmarks and manual runs.

Usage:
    python3 scripts/generate_corpus.py --output-dir corpus [--documents 200] [--words 2000] [--seed 7]
"""

import sys
import random
import argparse
from pathlib import Path
from typing import List

from invindex.client.manifest import write_manifest

# Mixed-case words with punctuation and digits so normalization has work to do
VOCABULARY = [
    "The", "quick", "brown", "fox", "jumps", "over", "lazy", "dog", "Zebra",
    "apple", "Banana", "cherry", "delta", "echo", "foxtrot", "golf", "hotel",
    "India", "juliet", "kilo", "lima", "mike", "November", "oscar", "papa",
    "quebec", "romeo", "sierra", "tango", "uniform", "victor", "whiskey",
    "x-ray", "yankee", "zulu", "don't", "e-mail", "C3PO", "R2D2", "hello,",
    "world!", "(parenthesis)", "\"quoted\"", "semi;colon", "...", "1984", "42",
]

MANIFEST_NAME = "manifest.txt"


def generate_document(path: Path, num_words: int, rng: random.Random):
    """
    Write one document of randomly chosen vocabulary words.

    Args:
        path: Where the document is written
        num_words: Number of tokens in the document
        rng: Seeded random source, so corpora are reproducible
    """
    words = [rng.choice(VOCABULARY) for _ in range(num_words)]
    lines = [' '.join(words[i:i + 12]) for i in range(0, len(words), 12)]
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8')


def generate_corpus(output_dir: Path, num_documents: int, words_per_document: int,
                    seed: int = 7) -> Path:
    """
    Generate documents and the manifest that lists them.

    Returns:
        Path to the manifest
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    rng = random.Random(seed)

    document_paths: List[str] = []
    for i in range(num_documents):
        doc_path = output_dir / f"doc_{i:05d}.txt"
        # Vary sizes so mappers finish at different times
        generate_document(doc_path, rng.randint(words_per_document // 2, words_per_document), rng)
        document_paths.append(str(doc_path))

    manifest_path = output_dir / MANIFEST_NAME
    write_manifest(str(manifest_path), document_paths)
    return manifest_path


def main():
    parser = argparse.ArgumentParser(description='Generate a synthetic corpus and manifest')
    parser.add_argument('--output-dir', default='corpus', help='Directory for documents and manifest')
    parser.add_argument('--documents', type=int, default=200, help='Number of documents')
    parser.add_argument('--words', type=int, default=2000, help='Maximum words per document')
    parser.add_argument('--seed', type=int, default=7, help='Random seed')
    args = parser.parse_args()

    if args.documents < 0 or args.words < 1:
        print("❌ --documents must be >= 0 and --words >= 1")
        return 1

    manifest = generate_corpus(Path(args.output_dir), args.documents, args.words, args.seed)
    print(f"✓ Generated {args.documents} documents")
    print(f"  Manifest: {manifest}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
