import argparse
import logging
from pathlib import Path

import rerun as rr

from plant_gen import LSystem, Season, build_shape_instances, interpret
from plant_gen.config import load_registry
from plant_gen.engine import make_rng
from plant_gen.visualize import log_as_markdown, log_geometry, log_graph


def main():
    parser = argparse.ArgumentParser(description="Grow a plant preset and show it in rerun")
    parser.add_argument("preset", nargs="?", default="bush")
    parser.add_argument("--season", default="summer", choices=[s.value for s in Season])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-length", type=int, default=2_000_000)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    registry = load_registry([Path(__file__).parent / "fern.toml"])
    grammar = registry.create_lsystem_data(args.preset, Season(args.season))

    rr.init("plant_gen_lsystem", spawn=True)

    rng = make_rng(args.seed)
    lsystem = LSystem(grammar=grammar)
    for i in range(grammar.iterations + 1):
        rr.set_time("generation", sequence=i)
        symbols = lsystem.symbols
        geometry = interpret(grammar, symbols, rng=rng)
        print(
            f"Generation {i}, symbols: {len(symbols)}, stems: {len(geometry.stems)}, "
            f"leaves: {len(geometry.leaves)}, flowers: {len(geometry.flowers)}"
        )
        log_geometry(geometry)
        if len(symbols) < 2_000:
            log_as_markdown(symbols)
        if len(symbols) < 300:
            log_graph(symbols)
        if i == grammar.iterations or not lsystem.step(rng, max_length=args.max_length):
            break

    shapes = build_shape_instances(grammar, geometry, rng=rng)
    print(f"Shape instances for the renderer: {len(shapes)}")


if __name__ == "__main__":
    main()
