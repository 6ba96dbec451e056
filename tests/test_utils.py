"""
Tests for the scratch pool, configuration and logging helpers.

Run:
    pytest tests/test_utils.py -v
"""

import sys
import os
import importlib
import logging
from concurrent.futures import ThreadPoolExecutor

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from fftspectrum import SpectrumConfig, Window, transform, transform_with_config
from fftspectrum.config import (
    DEFAULT_THRESHOLD,
    LOG_FORMAT,
    POOL_MAX_BUFFERS_PER_BUCKET,
    POOL_MAX_POOLED_LENGTH,
)
from fftspectrum.dsp_core import next_pow2
from fftspectrum.utils import ScratchPool, get_logger, setup_logging


class TestScratchPool:
    """Test suite for the scratch-buffer pool."""

    def test_lend_returns_zeroed_view(self):
        pool = ScratchPool()
        with pool.lend(6) as buf:
            assert len(buf) == 6
            assert buf.dtype == np.complex128
            assert not buf.any()
            buf[:] = 7 + 1j

        # Same capacity bucket, reused and cleared
        with pool.lend(8) as buf:
            assert len(buf) == 8
            assert not buf.any()

    def test_buffers_are_returned(self):
        pool = ScratchPool()
        with pool.lend(16):
            assert pool.outstanding == 1
            with pool.lend(16):
                assert pool.outstanding == 2
        assert pool.outstanding == 0
        assert pool.available(16) == 2

    def test_no_aliasing_between_concurrent_lends(self):
        pool = ScratchPool()
        with pool.lend(32) as a, pool.lend(32) as b:
            assert not np.shares_memory(a, b)

    def test_returned_on_exception(self):
        pool = ScratchPool()
        with pytest.raises(RuntimeError):
            with pool.lend(8):
                raise RuntimeError("boom")
        assert pool.outstanding == 0
        assert pool.available(8) == 1

    def test_bucket_bound(self):
        pool = ScratchPool(max_per_bucket=1)
        with pool.lend(4), pool.lend(4), pool.lend(4):
            pass
        assert pool.available(4) == 1
        assert pool.outstanding == 0

    def test_oversized_buffers_not_retained(self):
        pool = ScratchPool(max_pooled_length=64)
        transform(np.random.randn(100), pool=pool)
        assert pool.outstanding == 0
        assert pool.available(128) == 0

        # At the limit is still pooled
        with pool.lend(64):
            pass
        assert pool.available(64) == 1

    def test_long_transform_leaves_nothing_behind(self):
        pool = ScratchPool()
        big = POOL_MAX_POOLED_LENGTH + 1
        result = transform(np.random.randn(big), window='rectangular', pool=pool)

        print(f"\n[Long Transform Scratch]")
        print(f"  Input: {big} samples, output {len(result)} bins")

        assert len(result) == next_pow2(big) // 2
        assert pool.outstanding == 0
        assert pool.available(big) == 0
        held = sum(buf.nbytes for bucket in pool._buckets.values() for buf in bucket)
        assert held == 0

    def test_bucketing_matches_padding(self):
        pool = ScratchPool()
        for n in [1, 3, 100, 1000, 1025]:
            with pool.lend(n):
                pass
            assert pool.available(next_pow2(n)) >= 1
        assert sorted(pool._buckets) == [1, 4, 128, 1024, 2048]

    def test_default_limits(self):
        pool = ScratchPool()
        assert pool.max_pooled_length == POOL_MAX_POOLED_LENGTH
        assert pool.max_per_bucket == POOL_MAX_BUFFERS_PER_BUCKET

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            ScratchPool(max_pooled_length=-1)
        with pytest.raises(ValueError):
            ScratchPool(max_per_bucket=-1)
        with pytest.raises(ValueError):
            ScratchPool().rent(-1)

    def test_clear(self):
        pool = ScratchPool()
        with pool.lend(8):
            pass
        pool.clear()
        assert pool.available(8) == 0

    def test_transform_releases_scratch(self):
        pool = ScratchPool()
        result = transform(np.random.randn(100), pool=pool)
        assert pool.outstanding == 0
        # Padded waveform, bit-reversal buffer and stage buffer
        assert pool.available(128) == 3
        # The result is caller-owned, not a pooled buffer
        with pool.lend(128) as a, pool.lend(128) as b, pool.lend(128) as c:
            for buf in (a, b, c):
                assert not np.shares_memory(result, buf)

    def test_transform_releases_scratch_on_error(self, monkeypatch):
        transform_module = importlib.import_module('fftspectrum.dsp_core.transform')

        def broken(*args, **kwargs):
            raise RuntimeError("kernel failure")

        monkeypatch.setattr(transform_module, 'fft_radix2', broken)
        pool = ScratchPool()
        with pytest.raises(RuntimeError):
            transform(np.ones(8), pool=pool)
        assert pool.outstanding == 0

    def test_short_circuit_uses_no_buffers(self):
        pool = ScratchPool()
        assert transform(None, pool=pool) is None
        assert len(transform([], pool=pool)) == 0
        assert pool.outstanding == 0
        assert pool.available(1) == 0

    def test_concurrent_transforms(self):
        """Independent calls sharing one pool give the same answers as serial calls."""
        pool = ScratchPool()
        rng = np.random.default_rng(0)
        signals = [rng.standard_normal(n) for n in [64, 100, 128, 500, 1024] * 4]
        expected = [transform(x, window='hanning') for x in signals]

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda x: transform(x, window='hanning', pool=pool), signals))

        for ours, ref in zip(results, expected):
            np.testing.assert_array_equal(ours, ref)
        assert pool.outstanding == 0


class TestSpectrumConfig:
    """Test suite for configuration handling."""

    def test_defaults(self):
        config = SpectrumConfig()
        assert config.window is Window.HAMMING
        assert config.enable_low_pass_filter is False
        assert config.threshold == DEFAULT_THRESHOLD

    def test_from_dict_section(self):
        config = SpectrumConfig.from_dict({
            'spectrum': {'window': 'hann', 'enable_low_pass_filter': True, 'threshold': 0.25},
        })
        assert config.window is Window.HANNING
        assert config.enable_low_pass_filter is True
        assert config.threshold == 0.25

    def test_from_dict_flat_and_missing(self):
        config = SpectrumConfig.from_dict({'window': 'blackman'})
        assert config.window is Window.BLACKMAN
        assert config.threshold == DEFAULT_THRESHOLD

        assert SpectrumConfig.from_dict(None) == SpectrumConfig()

    def test_window_accepts_enum_or_name(self):
        assert SpectrumConfig(window=Window.TRIANGLE).window is Window.TRIANGLE
        assert SpectrumConfig(window='triangle') == SpectrumConfig(window=Window.TRIANGLE)

    def test_unknown_window(self):
        with pytest.raises(ValueError):
            SpectrumConfig(window='gaussian')

    def test_transform_with_config(self):
        x = np.random.randn(200)
        config = SpectrumConfig(window='blackman_harris', enable_low_pass_filter=True, threshold=0.2)
        np.testing.assert_array_equal(
            transform_with_config(x, config),
            transform(x, window=Window.BLACKMAN_HARRIS, enable_low_pass_filter=True, threshold=0.2),
        )
        np.testing.assert_array_equal(transform_with_config(x), transform(x))
        assert transform_with_config(None, config) is None


class TestLogging:
    """Test suite for logging setup."""

    def test_setup_logging_writes_file(self, tmp_path):
        log_file = tmp_path / 'logs' / 'spectrum.log'
        logger = setup_logging(log_file=str(log_file), level=logging.DEBUG, name='fftspectrum.test_file')
        try:
            logger.info("transform done")
            for handler in logger.handlers:
                handler.flush()
            content = log_file.read_text(encoding='utf-8')
            assert "transform done" in content
            assert "| INFO     | fftspectrum.test_file |" in content
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

    def test_setup_logging_replaces_handlers(self):
        name = 'fftspectrum.test_replace'
        setup_logging(name=name)
        logger = setup_logging(name=name)
        try:
            assert len(logger.handlers) == 1
            assert logger.handlers[0].formatter._fmt == LOG_FORMAT
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)

    def test_get_logger(self):
        assert get_logger().name == 'fftspectrum'
        assert get_logger('fftspectrum.dsp_core.transform').name == 'fftspectrum.dsp_core.transform'

    def test_transform_logs_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='fftspectrum'):
            transform(np.ones(5), window='triangle')
        assert any("padded=8" in record.getMessage() for record in caplog.records)
