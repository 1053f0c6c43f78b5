import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from .frames import FramePlacement
from .image_source import SourceImage
from .utils import create_background

logger = logging.getLogger(__name__)


class GifBuilder:

    # GIF stores delays in hundredths of a second and most viewers slow down anything under 20 ms
    MIN_FRAME_DURATION = 20

    def __init__(self):
        self.background_color: Tuple[int, int, int, int] = (0, 0, 0, 0)
        self.loop: int = 0
        self.optimize: bool = True
        self.disposal: int = 2
        self.color_count: int = 256

    def set_background_color(self, r: int, g: int, b: int, a: int = 255):
        self.background_color = (r, g, b, a)

    def set_loop(self, loop: int):
        self.loop = loop

    def set_color_count(self, color_count: int):
        """Set the number of colors in the palette (256, 128, 64, 32, 16, etc.)"""
        self.color_count = color_count

    @classmethod
    def frame_duration(cls, fps: int) -> int:
        """Per-frame delay in ms for fps, rounded to the 10 ms steps a GIF can store (8 fps -> 120 ms)."""
        return max(cls.MIN_FRAME_DURATION, 10 * round(100 / max(1, fps)))

    @staticmethod
    def canvas_size(plan: Sequence[FramePlacement]) -> Tuple[int, int]:
        width, height = plan[0].size
        return (max(1, width), max(1, height))

    def render_frame(self, source: SourceImage, placement: FramePlacement, size: Optional[Tuple[int, int]] = None) -> Optional[Image.Image]:
        """
        Draw one frame the way it will appear in the animation.

        The slice is pasted at (-offset_x, -offset_y), so a positive offset
        moves the sprite up/left inside the frame.

        Args:
            source: Sprite sheet to copy from
            placement: Source box and destination offset of the frame
            size: Canvas size, defaults to the slice's own size

        Returns:
            RGBA image, or None while the source is not ready
        """
        if not source.ready:
            return None

        if size is None:
            size = (max(1, placement.size[0]), max(1, placement.size[1]))

        layer = Image.new('RGBA', size, (0, 0, 0, 0))
        layer.paste(source.crop(placement.box), (-placement.offset_x, -placement.offset_y))

        background = create_background(size, self.background_color)
        return Image.alpha_composite(background, layer)

    def to_gif_frame(self, frame_img: Image.Image) -> Image.Image:
        if self.background_color[3] == 0:
            alpha = frame_img.split()[3]

            # Pixels with alpha >= 128 are considered opaque
            frame_img = frame_img.convert('RGB').convert('P', palette=Image.Palette.ADAPTIVE, colors=self.color_count - 1)
            mask = Image.eval(alpha, lambda a: 255 if a < 128 else 0)

            frame_img.paste(255, mask)
            frame_img.info['transparency'] = 255
            return frame_img

        rgb_bg = Image.new('RGB', frame_img.size, self.background_color[:3])
        rgb_bg.paste(frame_img, mask=frame_img.split()[3])
        return rgb_bg

    def build_from_plan(
        self,
        source: SourceImage,
        plan: Sequence[FramePlacement],
        fps: int,
        output_path: str
    ):
        """
        Encode the frames of an export plan as an animated GIF.

        Args:
            source: Sprite sheet the plan was derived from
            plan: Frames in playback order
            fps: Playback rate, see frame_duration()
            output_path: Output file path
        """
        if not source.ready:
            raise ValueError("Source image is not loaded, cannot generate GIF")

        if not plan:
            raise ValueError("No active frames, cannot generate GIF")

        size = self.canvas_size(plan)
        frames = [self.to_gif_frame(self.render_frame(source, placement, size)) for placement in plan]
        durations = [self.frame_duration(fps)] * len(frames)

        self.save_gif(frames, durations, output_path)
        logger.info("Exported %d frames to %s", len(frames), output_path)

    def save_gif(self, frames: List[Image.Image], durations: List[int], output_path: str):
        if not frames:
            raise ValueError("Frame list is empty")

        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        save_kwargs = {
            'format': 'GIF',
            'save_all': True,
            'append_images': frames[1:],
            'duration': durations,
            'loop': self.loop,
            'optimize': self.optimize,
            'disposal': self.disposal
        }

        if self.background_color[3] == 0:
            save_kwargs['disposal'] = 2

        try:
            frames[0].save(output_path, **save_kwargs)
        except OSError as e:
            raise ValueError(f"Failed to write GIF: {str(e)}") from e

    def export_slices(
        self,
        source: SourceImage,
        plan: Sequence[FramePlacement],
        directory: str,
        prefix: str = "frame"
    ) -> List[Path]:
        """Write every planned frame as a numbered PNG, in playback order."""
        if not source.ready:
            raise ValueError("Source image is not loaded, cannot export frames")

        if not plan:
            raise ValueError("No active frames to export")

        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)

        size = self.canvas_size(plan)
        paths = []
        for position, placement in enumerate(plan, start=1):
            path = out_dir / f"{prefix}_{position:03d}.png"
            self.render_frame(source, placement, size).save(path)
            paths.append(path)

        logger.info("Exported %d frame images to %s", len(paths), out_dir)
        return paths

    def get_gif_info(self, gif_path: str) -> dict:
        """
        Get information about a GIF file

        Args:
            gif_path: Path to GIF file

        Returns:
            Dictionary with GIF information
        """
        try:
            with Image.open(gif_path) as gif:
                total_duration = 0

                for frame_index in range(gif.n_frames):
                    gif.seek(frame_index)
                    total_duration += gif.info.get('duration', 100)

                return {
                    'frame_count': gif.n_frames,
                    'size': (gif.width, gif.height),
                    'total_duration_ms': total_duration,
                    'loop': gif.info.get('loop', 0),
                    'mode': gif.mode,
                    'has_transparency': 'transparency' in gif.info,
                    'file_size_bytes': Path(gif_path).stat().st_size
                }

        except Exception as e:
            raise ValueError(f"Failed to read GIF info: {str(e)}")
