"""
Tests for the KeyFinder pipeline: chunking, finalization and classification.
"""

import math

import numpy as np
import pytest

from keyfinder import (
    AudioData,
    ChromaTransformCache,
    FftSizeMismatchError,
    FilterCache,
    Key,
    KeyFinder,
    Parameters,
    Workspace,
)


def feed(finder, signal, sr, sizes):
    """Run a signal through a fresh workspace in chunks of the given sizes."""
    workspace = Workspace()
    start = 0
    for size in sizes:
        finder.process_chunk(workspace, AudioData(signal[start:start + size], sr))
        start += size
    if start < len(signal):
        finder.process_chunk(workspace, AudioData(signal[start:], sr))
    finder.finalize(workspace)
    return workspace


class TestChunkingInvariance:
    """The chromagram must not depend on how the signal is split."""

    @pytest.fixture
    def finder(self, small_parameters):
        return KeyFinder(small_parameters)

    @pytest.mark.parametrize("sizes", [
        [1, 2, 3, 4, 5, 6, 7],
        [1000] * 40,
        [4097, 3, 12345, 1, 8191],
        [66149],
    ])
    def test_chunked_equals_batch(self, finder, mixed_signal, sizes):
        """Test that chunked and one-shot processing give the same chromagram."""
        y, sr = mixed_signal

        batch = feed(finder, y, sr, [])
        chunked = feed(finder, y, sr, sizes)

        assert chunked.chromagram.hops == batch.chromagram.hops
        np.testing.assert_allclose(
            chunked.chromagram.as_array(),
            batch.chromagram.as_array(),
            rtol=1e-7, atol=1e-10,
        )

    def test_random_partition(self, finder, mixed_signal):
        """Test a random partition including chunks shorter than the decimation factor."""
        y, sr = mixed_signal
        rng = np.random.default_rng(42)
        sizes = list(rng.integers(1, 3000, size=60))

        batch = feed(finder, y, sr, [])
        chunked = feed(finder, y, sr, sizes)

        np.testing.assert_allclose(
            chunked.chromagram.as_array(),
            batch.chromagram.as_array(),
            rtol=1e-7, atol=1e-10,
        )

    def test_stereo_chunks(self, finder, mixed_signal):
        """Test that stereo chunking matches the batch mono mix."""
        y, sr = mixed_signal
        stereo = np.column_stack([y, 0.5 * y])

        batch = feed(finder, 0.75 * y, sr, [])
        workspace = Workspace()
        for start in range(0, len(y), 777):
            finder.process_chunk(workspace, AudioData(stereo[start:start + 777], sr))
        finder.finalize(workspace)

        np.testing.assert_allclose(
            workspace.chromagram.as_array(),
            batch.chromagram.as_array(),
            rtol=1e-7, atol=1e-10,
        )

    def test_caller_chunk_is_not_modified(self, finder):
        """Test that process_chunk works on a copy of the chunk."""
        samples = np.column_stack([np.ones(1003), np.zeros(1003)])
        chunk = AudioData(samples.copy(), 22050)

        finder.process_chunk(Workspace(), chunk)

        assert chunk.channels == 2
        np.testing.assert_array_equal(chunk.frames, samples)


class TestFinalize:
    """Test cases for the final flush and zero padding."""

    @pytest.fixture
    def finder(self, small_parameters):
        return KeyFinder(small_parameters)

    @pytest.mark.parametrize("length", [3, 1003, 12345, 30001])
    def test_padding(self, finder, length):
        """Test that the padded buffer covers every remaining hop."""
        params = finder.parameters
        signal = np.random.default_rng(length).standard_normal(length)

        # Measure the buffer after the flush on a twin workspace
        twin = Workspace()
        finder.process_chunk(twin, AudioData(signal, 22050))
        finder.preprocessor.preprocess(AudioData(), twin, flush=True)
        pre_pad = twin.preprocessed_buffer.sample_count
        padded_hops = math.ceil(pre_pad / params.hop_size)
        padded = params.frame_size + (padded_hops - 1) * params.hop_size
        assert padded >= pre_pad

        workspace = Workspace()
        finder.process_chunk(workspace, AudioData(signal, 22050))
        hops_before = workspace.hops
        finder.finalize(workspace)

        # The padded buffer is consumed in exactly padded_hops hops
        assert workspace.hops - hops_before == padded_hops
        assert workspace.preprocessed_buffer.sample_count == params.frame_size - params.hop_size
        assert workspace.finalized

    def test_every_sample_reaches_a_hop(self, small_parameters):
        """Test that a click in the last few samples shows up in the chromagram."""
        finder = KeyFinder(small_parameters)
        signal = np.zeros(22050 * 2 + 3)
        t = np.arange(400) / 22050
        signal[-400:] = np.sin(2 * np.pi * 440.0 * t)

        workspace = Workspace()
        finder.process_chunk(workspace, AudioData(signal, 22050))
        hops_before = workspace.hops
        assert not np.any(workspace.chromagram.as_array()[:hops_before])

        finder.finalize(workspace)
        assert np.any(workspace.chromagram.as_array()[hops_before:])

    def test_finalize_without_audio(self, small_parameters):
        """Test that an untouched workspace finalizes to silence."""
        finder = KeyFinder(small_parameters)
        workspace = Workspace()
        finder.finalize(workspace)

        assert workspace.hops == 0
        assert finder.classify(workspace) is Key.SILENCE

    def test_silent_audio(self, small_parameters):
        """Test that digital silence is undetermined."""
        finder = KeyFinder(small_parameters)

        assert finder.key_of_audio(AudioData(np.zeros(22050 * 2), 22050)) is Key.SILENCE


class TestKeyDetection:
    """End-to-end key detection on synthetic chords."""

    @pytest.fixture(scope="class")
    def finder(self):
        return KeyFinder()

    def test_c_major(self, finder, c_major_signal):
        """Test that C/G/E tones classify as C major."""
        y, sr = c_major_signal

        assert finder.key_of_audio(AudioData(y, sr)) is Key.C_MAJOR

    def test_c_major_chunked(self, finder, c_major_signal):
        """Test the same result from 0.1 s chunks."""
        y, sr = c_major_signal
        workspace = feed(finder, y, sr, [2205] * (len(y) // 2205))

        assert finder.classify(workspace) is Key.C_MAJOR

    def test_a_minor(self, finder, a_minor_signal):
        """Test that A/E/C tones classify as A minor."""
        y, sr = a_minor_signal

        assert finder.key_of_audio(AudioData(y, sr)) is Key.A_MINOR

    def test_transposed_signal(self, finder, c_major_signal):
        """Test that the same chord a fifth higher reads as G major."""
        y, sr = c_major_signal
        t = np.arange(len(y)) / sr
        ratio = 2 ** (7 / 12)
        shifted = np.zeros_like(t)
        for freq, amp in zip([130.81, 261.63, 196.00, 392.00, 329.63], [1.0, 1.0, 0.8, 0.8, 0.5]):
            shifted += amp * np.sin(2 * np.pi * freq * ratio * t)

        assert finder.key_of_audio(AudioData(0.2 * shifted, sr)) is Key.G_MAJOR

    def test_running_estimate(self, finder, c_major_signal):
        """Test classification mid-stream before finalize."""
        y, sr = c_major_signal
        workspace = Workspace()

        assert finder.classify(workspace) is Key.SILENCE

        finder.process_chunk(workspace, AudioData(y[:6 * sr], sr))
        assert workspace.hops > 0
        assert not workspace.finalized
        assert finder.classify(workspace) is Key.C_MAJOR

    def test_estimate(self, finder, c_major_signal):
        """Test the full estimate model."""
        y, sr = c_major_signal
        workspace = feed(finder, y, sr, [])
        estimate = finder.estimate(workspace)

        assert estimate.key is Key.C_MAJOR
        assert estimate.name == "C major"
        assert estimate.camelot == "8B"
        assert estimate.final
        assert estimate.hops == workspace.hops
        assert 0 < estimate.score <= 1
        assert len(estimate.alternatives) == KeyFinder.MAX_ALTERNATIVES
        assert all(alt.score <= estimate.score for alt in estimate.alternatives)
        assert len(estimate.chroma) == 12
        assert int(np.argmax(estimate.chroma)) == 0

    def test_silence_estimate(self, finder):
        """Test the estimate of an empty session."""
        estimate = finder.estimate(Workspace())

        assert estimate.is_silence
        assert estimate.name == "Silence"
        assert estimate.camelot is None
        assert estimate.alternatives == []


class TestKeyFinderConfiguration:
    """Test cases for KeyFinder wiring."""

    def test_shared_caches(self, small_parameters, mixed_signal):
        """Test that two finders can share filter and transform caches."""
        y, sr = mixed_signal
        filters, transforms = FilterCache(), ChromaTransformCache()
        a = KeyFinder(small_parameters, filters, transforms)
        b = KeyFinder(small_parameters, filters, transforms)

        a.key_of_audio(AudioData(y, sr))
        b.key_of_audio(AudioData(y, sr))

        assert len(filters) == 1
        assert len(transforms) == 1

    def test_custom_profiles(self):
        """Test that custom profiles reach the classifier."""
        profile = (5.0, 1.0, 3.0, 1.0, 4.0, 3.0, 1.0, 4.0, 1.0, 3.0, 1.0, 2.0)
        finder = KeyFinder(Parameters(custom_major_profile=profile, custom_minor_profile=profile))

        np.testing.assert_array_equal(finder.classifier.major, profile)
        np.testing.assert_array_equal(finder.classifier.minor, profile)

    def test_fft_adapter_is_never_resized(self):
        """Test that a workspace FFT adapter is fixed at its first size."""
        workspace = Workspace()
        adapter = workspace.get_fft_adapter(2048)

        assert workspace.get_fft_adapter(2048) is adapter
        with pytest.raises(FftSizeMismatchError):
            workspace.get_fft_adapter(4096)
