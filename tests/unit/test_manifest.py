"""
Unit tests for the manifest reader
"""

import os
import sys

import pytest

from invindex.client.manifest import read_manifest, write_manifest
from invindex.common.errors import ConfigurationError, ManifestError
from invindex.coordinator.work_queue import Document


def _manifest(temp_dir, content):
    path = os.path.join(temp_dir, 'manifest.txt')
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path


class TestReadManifest:
    """Tests for manifest parsing"""

    def test_reads_documents_in_order(self, temp_dir):
        path = _manifest(temp_dir, "3\nfirst.txt\nsecond.txt\nthird.txt\n")

        documents = read_manifest(path)

        assert documents == [
            Document(doc_id=1, path='first.txt'),
            Document(doc_id=2, path='second.txt'),
            Document(doc_id=3, path='third.txt'),
        ]

    def test_paths_kept_verbatim(self, temp_dir):
        path = _manifest(temp_dir, "2\n  leading.txt\ntrailing.txt  \n")

        documents = read_manifest(path)

        assert [d.path for d in documents] == ['  leading.txt', 'trailing.txt  ']

    def test_last_line_without_newline(self, temp_dir):
        path = _manifest(temp_dir, "1\nonly.txt")
        assert read_manifest(path)[0].path == 'only.txt'

    def test_extra_lines_ignored(self, temp_dir):
        path = _manifest(temp_dir, "1\na.txt\nb.txt\n")
        assert [d.path for d in read_manifest(path)] == ['a.txt']

    def test_zero_documents(self, temp_dir):
        path = _manifest(temp_dir, "0\n")
        assert read_manifest(path) == []

    def test_count_with_surrounding_whitespace(self, temp_dir):
        path = _manifest(temp_dir, " 1 \na.txt\n")
        assert len(read_manifest(path)) == 1

    def test_too_few_paths(self, temp_dir):
        path = _manifest(temp_dir, "3\na.txt\nb.txt\n")

        with pytest.raises(ManifestError, match="expected 3"):
            read_manifest(path)

    @pytest.mark.parametrize("header", ["", "three\n", "2.5\n", "\n", "1_0\n", "\u0661\n", "0x1\n"])
    def test_invalid_count(self, temp_dir, header):
        path = _manifest(temp_dir, header + "a.txt\n")

        with pytest.raises(ManifestError):
            read_manifest(path)

    def test_negative_count(self, temp_dir):
        path = _manifest(temp_dir, "-1\n")

        with pytest.raises(ManifestError, match="negative"):
            read_manifest(path)

    @pytest.mark.skipif(sys.platform != 'linux', reason="needs arbitrary bytes in file names")
    def test_non_utf8_path_resolves_to_same_file(self, temp_dir):
        document = os.path.join(os.fsencode(temp_dir), b'caf\xe9.txt')
        with open(document, 'w') as f:
            f.write("espresso")
        manifest = os.path.join(temp_dir, 'manifest.txt')
        with open(manifest, 'wb') as f:
            f.write(b'1\n' + document + b'\n')

        documents = read_manifest(manifest)

        assert os.fsencode(documents[0].path) == document
        with open(documents[0].path) as f:
            assert f.read() == "espresso"

    def test_missing_manifest(self, temp_dir):
        with pytest.raises(ManifestError):
            read_manifest(os.path.join(temp_dir, 'nope.txt'))

    def test_manifest_error_is_configuration_error(self, temp_dir):
        with pytest.raises(ConfigurationError):
            read_manifest(os.path.join(temp_dir, 'nope.txt'))


class TestWriteManifest:
    """Tests for manifest generation"""

    def test_written_manifest_reads_back(self, temp_dir):
        path = os.path.join(temp_dir, 'manifest.txt')
        write_manifest(path, ['x.txt', 'y.txt'])

        with open(path) as f:
            assert f.read() == "2\nx.txt\ny.txt\n"
        assert [d.doc_id for d in read_manifest(path)] == [1, 2]
