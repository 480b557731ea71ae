"""Tests for icnskit/output_handle.py"""

import os
import sys
import threading
import time

import pytest

from icnskit.output_handle import STANDARD_ERROR, STANDARD_OUTPUT, OutputHandle


class TestOutputHandle:
    """Test cases for OutputHandle"""

    def test_standard_handles(self):
        assert STANDARD_OUTPUT.file_descriptor == 1
        assert STANDARD_ERROR.file_descriptor == 2
        assert 'stderr' in repr(STANDARD_ERROR)

    def test_is_terminal(self, capfd):
        # Captured descriptors point at temporary files
        assert STANDARD_OUTPUT.is_terminal is False

    def test_redirect_discards_output(self, capfd):
        def noisy():
            os.write(2, b'fd noise\n')
            sys.stderr.write('stream noise\n')
            return 42

        result = STANDARD_ERROR.redirect(noisy)
        sys.stderr.write('restored\n')

        captured = capfd.readouterr()
        assert result == 42
        assert 'noise' not in captured.err
        assert 'restored' in captured.err

    def test_redirect_only_affects_its_handle(self, capfd):
        def body():
            os.write(1, b'to stdout\n')
            os.write(2, b'to stderr\n')

        STANDARD_ERROR.redirect(body)

        captured = capfd.readouterr()
        assert 'to stdout' in captured.out
        assert 'to stderr' not in captured.err

    def test_redirect_to_file(self, capfd, tmp_path):
        target = tmp_path / 'captured.log'

        with STANDARD_OUTPUT.redirected(str(target)):
            print('hello from python')
            os.write(1, b'hello from fd\n')

        contents = target.read_text()
        assert 'hello from python' in contents
        assert 'hello from fd' in contents
        assert 'hello' not in capfd.readouterr().out

    def test_restored_after_exception(self, capfd):
        def failing():
            os.write(2, b'before failure\n')
            raise ValueError('boom')

        with pytest.raises(ValueError):
            STANDARD_ERROR.redirect(failing)
        os.write(2, b'after failure\n')

        captured = capfd.readouterr()
        assert 'before failure' not in captured.err
        assert 'after failure' in captured.err

    def test_redirections_can_be_repeated(self, capfd):
        for _ in range(3):
            STANDARD_ERROR.redirect(lambda: os.write(2, b'hidden\n'))
        os.write(2, b'visible\n')

        err = capfd.readouterr().err
        assert 'hidden' not in err
        assert 'visible' in err

    def test_custom_handle(self, tmp_path, capfd):
        handle = OutputHandle(1, 'stdout')
        target = tmp_path / 'out.txt'
        handle.redirect(lambda: os.write(1, b'custom\n'), str(target))
        assert target.read_text() == 'custom\n'

    def test_concurrent_redirections_do_not_mix(self, capfd, tmp_path):
        targets = [tmp_path / 'first.log', tmp_path / 'second.log']
        barrier = threading.Barrier(len(targets))
        errors = []

        def body(name):
            os.write(2, f'{name} start\n'.encode())
            # Give the other thread a chance to redirect in between
            time.sleep(0.05)
            os.write(2, f'{name} end\n'.encode())

        def worker(target):
            try:
                barrier.wait()
                STANDARD_ERROR.redirect(lambda: body(target.stem), str(target))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(target,)) for target in targets]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)
        os.write(2, b'restored\n')

        assert errors == []
        assert targets[0].read_text() == 'first start\nfirst end\n'
        assert targets[1].read_text() == 'second start\nsecond end\n'
        err = capfd.readouterr().err
        assert 'restored' in err
        assert 'start' not in err

    def test_nested_redirection(self, capfd, tmp_path):
        outer = tmp_path / 'outer.log'
        inner = tmp_path / 'inner.log'

        with STANDARD_ERROR.redirected(str(outer)):
            os.write(2, b'outer before\n')
            with STANDARD_ERROR.redirected(str(inner)):
                os.write(2, b'inner\n')
            os.write(2, b'outer after\n')
        os.write(2, b'restored\n')

        assert outer.read_text() == 'outer before\nouter after\n'
        assert inner.read_text() == 'inner\n'
        assert 'restored' in capfd.readouterr().err
