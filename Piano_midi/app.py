#!/usr/bin/env python3
import argparse, signal, sys
import mido
from mido import MidiFile
from config import TIME_EPSILON_MS, START_DELAY_S
from chart import extract_reference, extract_performance
from judge import Judge
from replay import replay
from report import ConsoleLog
from scheduler import PlayScheduler
from midi_io import MidiInputLoop
from notifier import ArduinoNotifier, find_serial
from audio import ToneSink, audio_available
from profiles import build_active_map

def build_parser():
    ap = argparse.ArgumentParser(description="Piano practice judge: match what you play against a MIDI score.")
    ap.add_argument("midifile", help="Path to the reference MIDI file")
    ap.add_argument("--performance", help="Score a recorded take (MIDI file) instead of listening live")
    ap.add_argument("--input", help="MIDI input name (keyboard). If omitted in live mode, prints ports and exits.")
    ap.add_argument("--output", help="MIDI output name for guide notes (e.g., 'IAC Driver Bus 1')")
    ap.add_argument("--channel", type=int, help="Only use notes on this MIDI channel (0-15)")
    ap.add_argument("--transpose", type=int, default=0, help="Semitones added to incoming notes")
    ap.add_argument("--no-click", action="store_true", help="Disable count-in click")
    ap.add_argument("--tones", action="store_true", help="Beep on each hit/miss")
    ap.add_argument("--tol", type=int, default=TIME_EPSILON_MS, help=f"Match tolerance in ms (default {TIME_EPSILON_MS})")
    ap.add_argument("--serial", help="Arduino serial (full path or substring, e.g. 'usbmodem', 'COM5')")
    ap.add_argument("--baud", type=int, default=115200, help="Arduino baud (default 115200)")
    return ap

def print_ports():
    print("Available MIDI inputs:")
    for name in mido.get_input_names(): print("  -", name)
    print("\nAvailable MIDI outputs:")
    for name in mido.get_output_names(): print("  -", name)
    print("\nTip: re-run with --input 'Your Keyboard Port'")

def print_stats(stats: dict):
    print("\n----- Results -----")
    for k, v in stats.items():
        if isinstance(v, float): print(f"{k:>16s}: {v:.2f}")
        else:                    print(f"{k:>16s}: {v}")

def build_sinks(args):
    sinks = [ConsoleLog()]
    if args.tones:
        if audio_available():
            sinks.append(ToneSink())
        else:
            print("[WARN] simpleaudio not installed (pip install piano-match[audio]). Proceeding without tones.")
    if args.serial:
        port = find_serial(args.serial)
        if not port:
            print("[WARN] Serial port not found. Proceeding without Arduino.")
        else:
            sinks.append(ArduinoNotifier(port, args.baud))
    return sinks

def run_live(args, reference, tempo_map, sinks):
    judge = Judge(reference, tol_ms=args.tol, sinks=sinks)
    loop = MidiInputLoop(args.input, build_active_map(transpose=args.transpose))

    def on_sigint(signum, frame):
        loop.stop()
    signal.signal(signal.SIGINT, on_sigint)

    scheduler = PlayScheduler(channel=args.channel or 0)
    start_at = scheduler.start(
        reference=reference,
        tempo_map=tempo_map,
        play_click=(not args.no_click),
        midi_out_name=args.output,
        start_delay=START_DELAY_S,
    )

    def on_tick(now_ms, batch):
        judge.tick(now_ms, batch)
        if judge.done:
            loop.stop()

    try:
        loop.run(start_at, on_tick)
    finally:
        scheduler.stop(); scheduler.join()
    return judge.finalize()

def main(argv=None):
    args = build_parser().parse_args(argv)

    reference, tempo_map = extract_reference(MidiFile(args.midifile), args.channel)
    if not reference:
        print("No notes found in this MIDI.")
        return 1

    if not args.performance and not args.input:
        print_ports()
        return 0

    sinks = build_sinks(args)
    try:
        if args.performance:
            take, _ = extract_performance(MidiFile(args.performance), args.channel)
            to_value = build_active_map(transpose=args.transpose)
            for e in take:
                e.value = to_value(e.value)
            take = [e for e in take if e.value is not None]
            stats = replay(Judge(reference, tol_ms=args.tol, sinks=sinks), take)
        else:
            stats = run_live(args, reference, tempo_map, sinks)
    finally:
        for s in sinks:
            s.close()

    print_stats(stats)
    return 0

if __name__ == "__main__":
    sys.exit(main())
