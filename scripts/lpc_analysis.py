#!/usr/bin/env python3
"""
LPC spectral analysis of a single-channel signal.

Extracts LPC feature vectors, prints them as a table and compares the power
spectrum of one frame with its LPC envelope.

Usage:
    python scripts/lpc_analysis.py --input speech.wav --frame 10
    python scripts/lpc_analysis.py --sine 1000 --sr 16000 --duration 1.0 --plot overlay.png
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.analysis import SpectralComparison, SpectralOverlay, count_local_maxima
from src.features import LpcExtractor
from src.utils.config import AnalysisConfig
from src.utils.logging import setup_logging, log_config
from src.utils.signal import DiscreteSignal

CONSOLE = Console()
DEFAULT_CONFIG = PROJECT_ROOT / 'configs' / 'lpc_default.yaml'


def load_signal(args) -> DiscreteSignal:
    if args.input is not None:
        import librosa

        y, sr = librosa.load(args.input, sr=None, mono=True)
        return DiscreteSignal(y, sr)

    signal = DiscreteSignal.sine(args.sine, args.sr, args.duration)
    if args.noise > 0:
        rng = np.random.default_rng(args.seed)
        signal = DiscreteSignal(signal.samples + args.noise * rng.standard_normal(signal.length), args.sr)
    return signal


def build_config(args) -> AnalysisConfig:
    config = AnalysisConfig.from_yaml(args.config).to_dict()

    overrides = {
        'lpc_order': args.order,
        'window_size': args.window_size,
        'hop_size': args.hop_size,
        'fft_size': args.fft_size,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})
    return AnalysisConfig.from_dict(config)


def render_features(comparison: SpectralComparison, max_rows: int):
    table = Table(title="LPC feature vectors", show_header=True, header_style="bold magenta")
    table.add_column("time", justify="right")
    for name in comparison.extractor.feature_descriptions:
        table.add_column(name, justify="right")

    for vector in comparison.feature_vectors[:max_rows]:
        table.add_row(f"{vector.time_position:.3f}", *[f"{f:.4f}" for f in vector.features])

    CONSOLE.print(table)
    if comparison.frame_count > max_rows:
        CONSOLE.print(f"... {comparison.frame_count - max_rows} more frames")


def render_overlay(overlay: SpectralOverlay, cepstrum: np.ndarray):
    spectrum_peak = int(np.argmax(overlay.spectrum_db))
    envelope_peak = int(np.argmax(overlay.envelope_db))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Curve")
    table.add_column("Peak (Hz)", justify="right")
    table.add_column("Peak (dB)", justify="right")
    table.add_column("Local maxima", justify="right")

    table.add_row("FFT power spectrum",
                  f"{overlay.frequencies[spectrum_peak]:.1f}",
                  f"{overlay.spectrum_db[spectrum_peak]:.2f}",
                  str(count_local_maxima(overlay.spectrum_db)))
    table.add_row("LPC envelope",
                  f"{overlay.frequencies[envelope_peak]:.1f}",
                  f"{overlay.envelope_db[envelope_peak]:.2f}",
                  str(count_local_maxima(overlay.envelope_db)))

    CONSOLE.print(Panel.fit(table, title=f"Frame {overlay.frame_index} @ {overlay.time_position:.3f}s"))
    CONSOLE.print("Envelope cepstrum: " + " ".join(f"{c:.3f}" for c in cepstrum))


def save_plot(overlay: SpectralOverlay, path: str):
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    plt.figure(figsize=(10, 6))
    plt.plot(overlay.frequencies, overlay.spectrum_db, label='FFT power spectrum')
    plt.plot(overlay.frequencies, overlay.envelope_db, label='LPC envelope', linewidth=2)
    plt.title(f'Frame {overlay.frame_index} ({overlay.time_position:.3f}s)')
    plt.xlabel('Frequency (Hz)')
    plt.ylabel('dB')
    plt.legend()
    plt.grid(True)
    plt.savefig(path, dpi=150)
    plt.close()
    CONSOLE.print(f"Overlay saved to {path}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='LPC spectral analysis')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--input', type=str, help='Audio file (mixed down to mono)')
    source.add_argument('--sine', type=float, help='Synthetic sine frequency in Hz')
    parser.add_argument('--sr', type=int, default=16000, help='Sampling rate of the synthetic signal')
    parser.add_argument('--duration', type=float, default=1.0, help='Duration of the synthetic signal (s)')
    parser.add_argument('--noise', type=float, default=0.01, help='Noise level added to the synthetic signal')
    parser.add_argument('--seed', type=int, default=0, help='Noise seed')
    parser.add_argument('--config', type=str, default=str(DEFAULT_CONFIG), help='YAML config')
    parser.add_argument('--order', type=int, default=None, help='LPC order')
    parser.add_argument('--window-size', type=float, default=None, help='Window size (s)')
    parser.add_argument('--hop-size', type=float, default=None, help='Hop size (s)')
    parser.add_argument('--fft-size', type=int, default=None, help='FFT size (power of 2)')
    parser.add_argument('--frame', type=int, default=0, help='Frame index to compare')
    parser.add_argument('--max-rows', type=int, default=20, help='Feature rows to print')
    parser.add_argument('--plot', type=str, default=None, help='Save the overlay figure to this path')
    parser.add_argument('--log-file', type=str, default=None, help='Log file')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logger = setup_logging(log_file=args.log_file, level=logging.DEBUG, name='src')

    config = build_config(args)
    log_config(logger, config.to_dict())

    signal = load_signal(args)
    logger.info(f"Loaded {signal!r} ({signal.duration:.3f}s)")

    extractor = LpcExtractor(
        config.lpc_order,
        window_size=config.window_size,
        hop_size=config.hop_size,
        pre_emphasis=config.pre_emphasis,
        window=config.window,
    )
    comparison = SpectralComparison(signal, extractor, fft_size=config.fft_size, dct_size=config.dct_size)

    if comparison.frame_count == 0:
        CONSOLE.print("[yellow]Signal is shorter than one analysis window; no frames extracted[/yellow]")
        return 1

    render_features(comparison, args.max_rows)

    if not 0 <= args.frame < comparison.frame_count:
        CONSOLE.print(f"[red]Frame {args.frame} out of range (0..{comparison.frame_count - 1})[/red]")
        return 1

    try:
        overlay = comparison.compare(args.frame)
        cepstrum = comparison.envelope_cepstrum(args.frame)
    except ValueError as e:
        logger.warning(f"Frame {args.frame} has no LPC envelope: {e}")
        CONSOLE.print(f"[red]Frame {args.frame} has no LPC envelope (silent frame?): {e}[/red]")
        return 1

    render_overlay(overlay, cepstrum)

    if args.plot is not None:
        save_plot(overlay, args.plot)

    return 0


if __name__ == '__main__':
    sys.exit(main())
