"""Unit tests for audio data structures, loader and mixer."""

import numpy as np
import pytest

from padboard.audio import AudioData, AudioMixer, SampleLoader, Voice


class TestAudioData:
    """Test AudioData dataclass."""

    @pytest.mark.unit
    def test_create_from_mono_array(self, sample_audio_array):
        """Test creating AudioData from mono array."""
        audio = AudioData.from_array(sample_audio_array, sample_rate=44100)

        assert audio.sample_rate == 44100
        assert audio.num_channels == 1
        assert audio.num_frames == len(sample_audio_array)
        assert audio.data.dtype == np.float32

    @pytest.mark.unit
    def test_create_from_stereo_array(self):
        """Test creating AudioData from stereo array."""
        stereo_data = np.random.randn(1000, 2).astype(np.float32)
        audio = AudioData.from_array(stereo_data, sample_rate=44100)

        assert audio.num_channels == 2
        assert audio.num_frames == 1000

    @pytest.mark.unit
    def test_converts_to_float32(self):
        audio = AudioData.from_array(np.zeros(10, dtype=np.float64), sample_rate=44100)

        assert audio.data.dtype == np.float32

    @pytest.mark.unit
    def test_rejects_3d_array(self):
        with pytest.raises(ValueError):
            AudioData.from_array(np.zeros((2, 2, 2), dtype=np.float32), sample_rate=44100)

    @pytest.mark.unit
    def test_duration_property(self):
        """Test duration calculation."""
        data = np.zeros(44100, dtype=np.float32)  # 1 second
        audio = AudioData.from_array(data, sample_rate=44100)

        assert audio.duration == pytest.approx(1.0, rel=1e-3)

    @pytest.mark.unit
    def test_get_info(self, sample_audio_array):
        audio = AudioData.from_array(sample_audio_array, sample_rate=44100)
        audio.format = "WAV"

        info = audio.get_info()

        assert info["num_frames"] == len(sample_audio_array)
        assert info["size_bytes"] == sample_audio_array.nbytes
        assert info["size_str"].endswith("KB")
        assert info["format"] == "WAV"
        assert "subtype" not in info


class TestVoice:
    """Test Voice playback handle."""

    @pytest.fixture
    def audio(self):
        return AudioData.from_array(np.arange(100, dtype=np.float32), sample_rate=44100)

    @pytest.mark.unit
    def test_new_voice_is_playing(self, audio):
        voice = Voice(audio_data=audio)

        assert voice.is_playing
        assert voice.position == 0
        assert voice.progress == 0.0

    @pytest.mark.unit
    def test_voice_ids_are_unique(self, audio):
        assert Voice(audio_data=audio).voice_id != Voice(audio_data=audio).voice_id

    @pytest.mark.unit
    def test_voices_compare_by_identity(self, audio):
        """Two voices on the same clip are different handles."""
        first = Voice(audio_data=audio)
        second = Voice(audio_data=audio)
        second.voice_id = first.voice_id

        assert first != second

    @pytest.mark.unit
    def test_get_frames_and_advance(self, audio):
        voice = Voice(audio_data=audio)

        frames = voice.get_frames(30)
        assert np.array_equal(frames, np.arange(30, dtype=np.float32))

        voice.advance(30)
        assert voice.position == 30
        assert voice.get_frames(10)[0] == 30.0

    @pytest.mark.unit
    def test_last_block_is_truncated(self, audio):
        voice = Voice(audio_data=audio, position=90)

        assert len(voice.get_frames(50)) == 10

    @pytest.mark.unit
    def test_voice_stops_at_end(self, audio):
        voice = Voice(audio_data=audio)

        voice.advance(100)

        assert not voice.is_playing
        assert voice.get_frames(10) is None
        assert voice.progress == 1.0

    @pytest.mark.unit
    def test_stopped_voice_renders_nothing(self, audio):
        voice = Voice(audio_data=audio)
        voice.stop()
        voice.stop()

        assert voice.get_frames(10) is None
        voice.advance(10)
        assert voice.position == 0


class TestAudioMixer:
    """Test AudioMixer."""

    @pytest.mark.unit
    def test_empty_mix_is_silence(self):
        mixer = AudioMixer(num_channels=2)

        output = mixer.mix([], 64)

        assert output.shape == (64, 2)
        assert not output.any()

    @pytest.mark.unit
    def test_mono_voice_fills_both_channels(self):
        mixer = AudioMixer(num_channels=2)
        voice = Voice(audio_data=AudioData.from_array(np.full(64, 0.25, dtype=np.float32), 44100))

        output = mixer.mix([voice], 64)

        assert np.allclose(output, 0.25)

    @pytest.mark.unit
    def test_voices_are_summed(self):
        mixer = AudioMixer(num_channels=1)
        a = Voice(audio_data=AudioData.from_array(np.full(32, 0.25, dtype=np.float32), 44100))
        b = Voice(audio_data=AudioData.from_array(np.full(32, 0.5, dtype=np.float32), 44100))

        output = mixer.mix([a, b], 32)

        assert np.allclose(output, 0.75)

    @pytest.mark.unit
    def test_short_voice_is_padded_and_finished(self):
        mixer = AudioMixer(num_channels=1)
        voice = Voice(audio_data=AudioData.from_array(np.ones(10, dtype=np.float32), 44100))

        output = mixer.mix([voice], 32)

        assert np.allclose(output[:10], 1.0)
        assert not output[10:].any()
        assert not voice.is_playing

    @pytest.mark.unit
    def test_stereo_to_mono(self):
        mixer = AudioMixer(num_channels=1)
        stereo = np.column_stack([np.ones(16), np.zeros(16)]).astype(np.float32)
        voice = Voice(audio_data=AudioData.from_array(stereo, 44100))

        output = mixer.mix([voice], 16)

        assert np.allclose(output, 0.5)

    @pytest.mark.unit
    def test_master_volume_and_soft_clip(self):
        buffer = np.full(8, 2.0, dtype=np.float32)

        AudioMixer.apply_master_volume(buffer, 0.5)
        assert np.allclose(buffer, 1.0)

        AudioMixer.soft_clip(buffer)
        assert np.allclose(buffer, np.tanh(1.0))


class TestSampleLoader:
    """Test SampleLoader."""

    @pytest.mark.unit
    def test_load_wav(self, sample_audio_file):
        audio = SampleLoader().load(sample_audio_file)

        assert audio.sample_rate == 44100
        assert audio.num_channels == 1
        assert audio.duration == pytest.approx(0.1, abs=0.001)
        assert audio.format == "WAV"

    @pytest.mark.unit
    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            SampleLoader().load(temp_dir / "missing.wav")

    @pytest.mark.unit
    def test_garbage_file(self, temp_dir):
        path = temp_dir / "bad.wav"
        path.write_bytes(b"\x00\x01\x02 not a riff header")

        with pytest.raises(RuntimeError):
            SampleLoader().load(path)

    @pytest.mark.unit
    def test_resample(self, sample_audio_file):
        audio = SampleLoader(target_sample_rate=48000).load(sample_audio_file)

        assert audio.sample_rate == 48000
        assert audio.num_frames == 4800
        assert audio.duration == pytest.approx(0.1, abs=0.001)
