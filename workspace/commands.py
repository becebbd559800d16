"""Line-oriented command boundary over ImageEngine.

Commands take whitespace-separated positional arguments, for example::

    load images/koala.ppm koala
    blur koala mask koala-blur
    split levels-adjust koala koala-split 50 20 100 255
    save out/koala-blur.png koala-blur
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from config import get_settings
from models.errors import ImageError, InvalidArgumentError
from models.operation_params import LevelsParams
from utils.constants import COMPONENTS
from utils.log import get_logger
from workspace.engine import ImageEngine

logger = get_logger(__name__)


@dataclass
class ScriptReport:
    """Outcome of running a batch of commands."""

    executed: int = 0
    messages: List[str] = field(default_factory=list)
    failures: List[Tuple[int, str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _int_arg(token: str, label: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidArgumentError(f"{label} must be an integer, got '{token}'") from None


def _expect(args: List[str], minimum: int, usage: str, maximum: Optional[int] = None) -> None:
    if len(args) < minimum or (maximum is not None and len(args) > maximum):
        raise InvalidArgumentError(f"Usage: {usage}")


def _src_mask_dst(args: List[str], usage: str) -> Tuple[str, Optional[str], str]:
    """Split 'src [mask] dst'."""
    _expect(args, 2, usage, maximum=3)
    if len(args) == 3:
        return args[0], args[1], args[2]
    return args[0], None, args[1]


class CommandRunner:
    """Parses commands and dispatches them to an ImageEngine."""

    def __init__(self, engine: Optional[ImageEngine] = None):
        self.engine = engine if engine is not None else ImageEngine()
        self._handlers: Dict[str, Callable[[List[str]], str]] = {
            'load': self._load,
            'save': self._save,
            'flip': self._flip,
            'horizontal-flip': lambda args: self._flip(['horizontal'] + args),
            'vertical-flip': lambda args: self._flip(['vertical'] + args),
            'brighten': self._brighten,
            'blur': lambda args: self._maskable('blur', args),
            'sharpen': lambda args: self._maskable('sharpen', args),
            'sepia': lambda args: self._maskable('sepia', args),
            'greyscale': self._greyscale,
            'rgb-split': self._rgb_split,
            'rgb-combine': self._rgb_combine,
            'histogram': self._histogram,
            'color-correct': self._color_correct,
            'levels-adjust': self._levels_adjust,
            'split': self._split,
            'compress': self._compress,
            'downscale': self._downscale,
            'run': self._run,
        }
        for component in COMPONENTS:
            self._handlers[f'{component}-component'] = (
                lambda args, c=component: self._component(c, args)
            )

    @property
    def commands(self) -> List[str]:
        return sorted(self._handlers)

    def execute(self, line: str) -> str:
        """Run one command line and return a confirmation message.

        Raises ImageError subclasses on failure; unknown commands raise
        InvalidArgumentError.
        """
        tokens = line.split()
        if not tokens:
            raise InvalidArgumentError("No command entered.")
        action, args = tokens[0].lower(), tokens[1:]
        handler = self._handlers.get(action)
        if handler is None:
            raise InvalidArgumentError(f"Unknown command: {action}")
        return handler(args)

    def run_lines(self, lines: Iterable[str], stop_on_error: Optional[bool] = None) -> ScriptReport:
        """Execute commands, skipping blanks and # comments.

        Failures are logged and collected; execution continues unless
        stop_on_error is set (default from settings).
        """
        if stop_on_error is None:
            stop_on_error = get_settings().stop_on_error

        report = ScriptReport()
        for line_no, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith('#'):
                continue
            try:
                message = self.execute(line)
            except ImageError as e:
                logger.warning("Line %d '%s' failed: %s", line_no, line, e)
                report.failures.append((line_no, line, str(e)))
                if stop_on_error:
                    break
            else:
                report.executed += 1
                report.messages.append(message)
        return report

    def run_script(self, path, stop_on_error: Optional[bool] = None) -> ScriptReport:
        path = Path(path)
        if not path.is_file():
            raise InvalidArgumentError(f"Script file not found: {path}")
        logger.info("Running script %s", path)
        with path.open(encoding='utf-8') as fh:
            return self.run_lines(fh, stop_on_error)

    # --- handlers ---

    def _load(self, args: List[str]) -> str:
        _expect(args, 2, "load <path> <name>", maximum=2)
        self.engine.load(args[0], args[1])
        return f"Loaded image: {args[1]}"

    def _save(self, args: List[str]) -> str:
        _expect(args, 2, "save <path> <name>", maximum=2)
        self.engine.save(args[0], args[1])
        return f"Saved image: {args[1]} to {args[0]}"

    def _component(self, component: str, args: List[str]) -> str:
        src, mask, dst = _src_mask_dst(args, f"{component}-component <src> [mask] <dst>")
        self.engine.visualize_component(component, src, dst, mask)
        return f"Visualized {component} component: {dst}"

    def _flip(self, args: List[str]) -> str:
        _expect(args, 3, "flip <horizontal|vertical> <src> <dst>", maximum=3)
        direction, src, dst = args
        self.engine.flip(direction, src, dst)
        return f"Flipped image {direction}: {dst}"

    def _brighten(self, args: List[str]) -> str:
        _expect(args, 3, "brighten <amount> <src> <dst>", maximum=3)
        amount = _int_arg(args[0], "Brighten amount")
        self.engine.brighten(amount, args[1], args[2])
        return f"Brightened image by {amount}: {args[2]}"

    def _maskable(self, operation: str, args: List[str]) -> str:
        src, mask, dst = _src_mask_dst(args, f"{operation} <src> [mask] <dst>")
        getattr(self.engine, operation)(src, dst, mask)
        return f"{operation} applied to: {dst}"

    def _greyscale(self, args: List[str]) -> str:
        component = None
        if len(args) >= 3 and args[0].lower() in COMPONENTS:
            component, args = args[0].lower(), args[1:]
        src, mask, dst = _src_mask_dst(args, "greyscale [component] <src> [mask] <dst>")
        self.engine.greyscale(src, dst, mask, component)
        return f"Converted {src} to greyscale: {dst}"

    def _rgb_split(self, args: List[str]) -> str:
        _expect(args, 4, "rgb-split <src> <red> <green> <blue>", maximum=4)
        self.engine.rgb_split(*args)
        return f"RGB split done: {args[1]}, {args[2]}, {args[3]}"

    def _rgb_combine(self, args: List[str]) -> str:
        _expect(args, 4, "rgb-combine <dst> <red> <green> <blue>", maximum=4)
        self.engine.rgb_combine(*args)
        return f"RGB combine done: {args[0]}"

    def _histogram(self, args: List[str]) -> str:
        _expect(args, 2, "histogram <src> <dst>", maximum=2)
        self.engine.histogram(args[0], args[1])
        return f"Histogram generated: {args[1]}"

    def _color_correct(self, args: List[str]) -> str:
        _expect(args, 2, "color-correct <src> <dst>", maximum=2)
        self.engine.color_correct(args[0], args[1])
        return f"Color correction applied to: {args[1]}"

    def _levels_adjust(self, args: List[str]) -> str:
        _expect(args, 5, "levels-adjust <black> <mid> <white> <src> <dst>", maximum=5)
        black, mid, white = (_int_arg(t, "Levels point") for t in args[:3])
        self.engine.levels_adjust(black, mid, white, args[3], args[4])
        return f"Levels adjustment applied to: {args[4]}"

    def _split(self, args: List[str]) -> str:
        usage = "split <operation> <src> <dst> <percent> [black mid white]"
        _expect(args, 4, usage, maximum=7)
        operation, src, dst = args[:3]
        percent = _int_arg(args[3], "Split percentage")
        levels = None
        if operation.lower() in ('levels', 'levels-adjust'):
            if len(args) != 7:
                raise InvalidArgumentError(
                    "Provide black, mid, and white levels for the levels split operation"
                )
            levels = LevelsParams(*(_int_arg(t, "Levels point") for t in args[4:7]))
        elif len(args) > 4:
            raise InvalidArgumentError(f"Usage: {usage}")
        self.engine.split(operation, src, dst, percent, levels)
        return f"{operation} with split applied to: {dst}"

    def _compress(self, args: List[str]) -> str:
        _expect(args, 3, "compress <percent> <src> <dst>", maximum=3)
        percent = _int_arg(args[0], "Compression percentage")
        self.engine.compress(percent, args[1], args[2])
        return f"Compressed image {args[1]} by {percent}%: {args[2]}"

    def _downscale(self, args: List[str]) -> str:
        _expect(args, 4, "downscale <width> <height> <src> <dst>", maximum=4)
        width = _int_arg(args[0], "Width")
        height = _int_arg(args[1], "Height")
        self.engine.downscale(width, height, args[2], args[3])
        return f"Downscaled image {args[2]} to {width}x{height}: {args[3]}"

    def _run(self, args: List[str]) -> str:
        _expect(args, 1, "run <script-path>", maximum=1)
        report = self.run_script(args[0])
        return f"Script executed: {report.executed} command(s), {len(report.failures)} failure(s)"
