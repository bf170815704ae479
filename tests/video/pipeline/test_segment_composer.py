"""Tests for segment composition."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ad_automator.video.pipeline.base import CompositionError, ProbeError
from ad_automator.video.pipeline.media_tools import MediaTools
from ad_automator.video.pipeline.segment_composer import (
    SegmentComposer,
    build_audio_filter,
    build_video_filter,
    clean_caption_text,
    compute_final_duration,
    encoder_args,
    escape_filter_path,
    wrap_caption_text,
)


def value_after(cmd: list[str], flag: str) -> str:
    return cmd[cmd.index(flag) + 1]


@pytest.fixture
def inputs(tmp_path: Path) -> tuple[Path, Path, Path]:
    video = tmp_path / "seg_0_video.mp4"
    audio = tmp_path / "seg_0_audio.mp3"
    video.write_bytes(b"video")
    audio.write_bytes(b"audio")
    return video, audio, tmp_path / "seg_0_final.mp4"


@pytest.fixture
def composer(media_tools) -> SegmentComposer:
    composer = SegmentComposer(media_tools)
    composer.probe = MagicMock()
    composer.probe.probe = AsyncMock(return_value=4.0)
    return composer


class TestPureHelpers:
    """Tests for duration, caption and filter helpers."""

    @pytest.mark.parametrize("audio_duration", [0.01, 1.0, 4.37, 12.5, 59.999])
    def test_final_duration_adds_one_second(self, audio_duration):
        assert compute_final_duration(audio_duration) == pytest.approx(audio_duration + 1.0)

    def test_clean_caption_text(self):
        raw = "He said \u201cdon\u2019t stop\u201d \u2014 now!  #1 $5"
        assert clean_caption_text(raw) == "He said dont stop now! 1 5"

    def test_clean_caption_keeps_basic_punctuation(self):
        assert clean_caption_text("Calm, steady - and sure? Yes.") == "Calm, steady - and sure? Yes."

    def test_wrap_caption_text(self):
        wrapped = wrap_caption_text("The quick brown fox jumps over the lazy dog again", 25)

        assert wrapped.split("\n") == ["The quick brown fox jumps", "over the lazy dog again"]

    def test_wrap_never_breaks_words(self):
        word = "supercalifragilisticexpialidocious"
        assert wrap_caption_text(f"a {word} b", 10).split("\n") == ["a", word, "b"]

    def test_video_filter_covers_vertical_frame(self):
        graph = build_video_filter()

        assert graph.startswith("[0:v]scale=1080:1920:force_original_aspect_ratio=increase,crop=1080:1920")
        assert graph.endswith("[v]")
        assert "drawtext" not in graph

    def test_video_filter_caption(self, tmp_path: Path):
        graph = build_video_filter(tmp_path / "caption.txt", "C:\\Windows\\Fonts\\arialbd.ttf")

        assert "drawtext=fontfile='C\\:/Windows/Fonts/arialbd.ttf'" in graph
        assert "fontcolor=white" in graph
        assert "fontsize=72" in graph
        assert "x=(w-text_w)/2" in graph
        assert "y=h-text_h-250" in graph
        assert "borderw=8" in graph
        assert "bordercolor=black" in graph

    def test_audio_filter(self):
        assert build_audio_filter(5.0) == "[1:a]asetpts=PTS-STARTPTS,adelay=200|200,apad=whole_dur=5.000[a]"

    def test_escape_filter_path(self):
        assert escape_filter_path("/tmp/a:b.txt") == "'/tmp/a\\:b.txt'"

    def test_software_encoder(self):
        assert encoder_args(False) == ["-c:v", "libx264", "-preset", "fast", "-crf", "18"]

    def test_hardware_encoder(self):
        args = encoder_args(True, "h264_amf")
        assert args[:2] == ["-c:v", "h264_amf"]
        assert "-qp_i" in args


class TestSegmentComposer:
    """Tests for SegmentComposer.compose."""

    @pytest.mark.asyncio
    async def test_compose_command(self, composer, inputs):
        video, audio, output = inputs
        run = AsyncMock(return_value=(0, "", ""))

        with patch.object(MediaTools, "run", run):
            duration = await composer.compose(video, audio, output)

        assert duration == pytest.approx(5.0)
        cmd = run.await_args.args[0]
        assert cmd[0] == "ffmpeg"
        assert value_after(cmd, "-stream_loop") == "-1"
        assert value_after(cmd, "-t") == "5.000"
        assert value_after(cmd, "-r") == "30"
        assert value_after(cmd, "-c:v") == "libx264"
        assert value_after(cmd, "-c:a") == "aac"
        assert value_after(cmd, "-b:a") == "192k"
        assert value_after(cmd, "-ar") == "44100"
        assert value_after(cmd, "-ac") == "2"
        assert value_after(cmd, "-pix_fmt") == "yuv420p"
        assert "crop=1080:1920" in value_after(cmd, "-filter_complex")
        assert cmd[-1] == str(output)

    @pytest.mark.asyncio
    async def test_caption_file_written_then_removed(self, composer, inputs, tmp_path: Path):
        video, audio, output = inputs
        seen: dict[str, str] = {}

        async def fake_run(cmd, timeout=None):
            caption_files = list(tmp_path.glob("*_caption.txt"))
            seen["text"] = caption_files[0].read_text(encoding="utf-8")
            seen["graph"] = value_after(cmd, "-filter_complex")
            return 0, "", ""

        with patch.object(MediaTools, "run", AsyncMock(side_effect=fake_run)):
            await composer.compose(
                video,
                audio,
                output,
                caption="Wealth is built \u201cquietly\u201d, with patience and time.",
            )

        assert seen["text"] == "Wealth is built quietly,\nwith patience and time."
        assert "drawtext=" in seen["graph"]
        assert "textfile=" in seen["graph"]
        assert not list(tmp_path.glob("*_caption.txt"))

    @pytest.mark.asyncio
    async def test_hardware_encoder_used(self, media_tools, inputs):
        composer = SegmentComposer(media_tools, hardware_encoder="h264_nvenc")
        composer.probe = MagicMock()
        composer.probe.probe = AsyncMock(return_value=2.0)
        video, audio, output = inputs
        run = AsyncMock(return_value=(0, "", ""))

        with patch.object(MediaTools, "run", run):
            await composer.compose(video, audio, output, use_hardware_encoder=True)

        assert value_after(run.await_args.args[0], "-c:v") == "h264_nvenc"

    @pytest.mark.asyncio
    async def test_ffmpeg_failure(self, composer, inputs, tmp_path: Path):
        video, audio, output = inputs

        with patch.object(MediaTools, "run", AsyncMock(return_value=(1, "", "Error opening input file"))):
            with pytest.raises(CompositionError, match="Error opening input file"):
                await composer.compose(video, audio, output, caption="Some caption")

        assert not list(tmp_path.glob("*_caption.txt"))

    @pytest.mark.asyncio
    async def test_probe_failure_aborts(self, composer, inputs):
        video, audio, output = inputs
        composer.probe.probe = AsyncMock(side_effect=ProbeError("Invalid duration"))
        run = AsyncMock(return_value=(0, "", ""))

        with patch.object(MediaTools, "run", run):
            with pytest.raises(ProbeError):
                await composer.compose(video, audio, output)

        run.assert_not_awaited()
