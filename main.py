"""
Raster Lab
Named-image raster processing: filters, tone curves, Haar compression, resampling.
"""

import sys
import warnings

warnings.filterwarnings('ignore', category=RuntimeWarning)

USAGE = """Usage: python main.py --file <script>      run a command script
       python main.py --text               read commands from stdin
       python main.py --demo [key] [percent]
                                           Haar compression of a synthetic image"""


def run_script(path: str) -> int:
    """Run a script file; exit status 1 if any command failed."""
    from workspace.commands import CommandRunner
    from models.errors import ImageError

    runner = CommandRunner()
    try:
        report = runner.run_script(path)
    except ImageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for message in report.messages:
        print(message)
    for line_no, line, error in report.failures:
        print(f"Line {line_no}: {line} - {error}", file=sys.stderr)
    print(f"Script finished: {report.executed} command(s), {len(report.failures)} failure(s)")
    return 0 if report.ok else 1


def run_interactive() -> int:
    """Read commands from stdin until EOF or 'quit'."""
    from workspace.commands import CommandRunner
    from models.errors import ImageError

    runner = CommandRunner()
    for raw in sys.stdin:
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        if line.lower() in ('quit', 'exit', 'q'):
            break
        try:
            print(runner.execute(line))
        except ImageError as e:
            print(f"Error executing command: {line.split()[0]} - {e}")
    return 0


def run_demo(args) -> int:
    """Compress a synthetic image and print the metrics."""
    from models.operation_params import CompressionParams
    from engines.wavelet import compress_reconstruct
    from utils.test_images import generate_demo_image
    from utils.image_io import save_image

    key = args[0] if args else 'checkerboard'
    percent = int(args[1]) if len(args) > 1 else 50

    image = generate_demo_image(key)
    if image is None:
        print(f"Unknown demo image: {key}", file=sys.stderr)
        return 1

    print(f"Image: {image.width}x{image.height} ({key})")
    print(f"Percent: {percent}")

    result, _ = compress_reconstruct(image, CompressionParams(percent))

    ssim = f"{result.ssim_rgb:.4f}" if result.ssim_rgb is not None else "n/a"
    print("\n=== Results ===")
    print(f"Threshold: {result.threshold}")
    print(f"PSNR:      {result.psnr_rgb:.2f} dB")
    print(f"SSIM:      {ssim}")
    print(f"Zeroed:    {result.zeroed_fraction:.1%} of {result.total_coeffs} coefficients")
    print(f"Time:      {result.forward_time_ms + result.inverse_time_ms:.2f} ms")

    save_image(result.reconstructed_image, "reconstructed.png")
    print("\nSaved: reconstructed.png")
    return 0


def main():
    from utils.log import setup_logging

    setup_logging()
    args = sys.argv[1:]

    if len(args) == 2 and args[0].lower() in ('--file', '-file'):
        sys.exit(run_script(args[1]))
    elif len(args) == 1 and args[0].lower() in ('--text', '-text'):
        sys.exit(run_interactive())
    elif args and args[0] == '--demo':
        sys.exit(run_demo(args[1:]))
    else:
        print(USAGE)
        sys.exit(0 if args and args[0] == '--help' else 2)


if __name__ == '__main__':
    main()
