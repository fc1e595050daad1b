"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import tempfile
import shutil

from invindex.client.manifest import write_manifest


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def sample_text():
    """Sample text for testing"""
    return """The quick brown fox jumps over the lazy dog.
The dog was really lazy.
The fox was very quick and brown.
Quick brown foxes are amazing animals.
Lazy dogs sleep all day."""


@pytest.fixture
def sample_input_file(temp_dir, sample_text):
    """Create a sample input file for testing"""
    filepath = os.path.join(temp_dir, 'input.txt')
    with open(filepath, 'w') as f:
        f.write(sample_text)
    return filepath


@pytest.fixture
def make_corpus(temp_dir):
    """
    Factory fixture: write documents and a manifest listing them.

    Accepts a list of document texts; None entries are listed in the
    manifest but never created on disk.
    """
    def _make(texts, name='corpus'):
        corpus_dir = os.path.join(temp_dir, name)
        os.makedirs(corpus_dir, exist_ok=True)
        paths = []
        for i, text in enumerate(texts):
            path = os.path.join(corpus_dir, f'doc{i + 1}.txt')
            if text is not None:
                with open(path, 'w') as f:
                    f.write(text)
            paths.append(path)
        manifest_path = os.path.join(corpus_dir, 'manifest.txt')
        write_manifest(manifest_path, paths)
        return manifest_path
    return _make


@pytest.fixture
def output_dir(temp_dir):
    """Directory for letter files"""
    path = os.path.join(temp_dir, 'output')
    os.makedirs(path)
    return path


@pytest.fixture
def read_letter():
    """Read the contents of one letter file from a directory"""
    def _read(directory, letter):
        with open(os.path.join(directory, f'{letter}.txt')) as f:
            return f.read()
    return _read
