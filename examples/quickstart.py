"""
Neuro Norms - Quick Start Example

Scores a Trail Making Test result against the packaged norms and shows how
to assemble an engine from your own norm tables.

Usage:
    python examples/quickstart.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from neuronorms import DomainError, create_engine
from neuronorms.engine import build_engine
from neuronorms.norms import AgeBand, AnchorOverride, ChildAgeBandGroup, ChildRegressionSpec


def main():
    # 1. Packaged norms
    print("=" * 60)
    print("1. TMT-B FOR A 17-YEAR-OLD")
    print("=" * 60)

    tmt_b = create_engine('tmt_b')
    for raw in (33.80, 53.92, 74.04, 120.0):
        r = tmt_b.standardize(17, raw)
        print(f"  raw {raw:>6.2f}s  ->  z {r.z_score:>5.2f}  T {r.t_score:>3.0f}  pctl {r.percentile:>5.1f}")

    # 2. Child norms are imputed and averaged into bands
    print("\n" + "=" * 60)
    print("2. MERGED NORM TABLE")
    print("=" * 60)
    print(tmt_b.norm_table.to_frame().to_string(index=False))

    # 3. Ages outside the norms are rejected, never clamped
    print("\n" + "=" * 60)
    print("3. OUT-OF-RANGE AGE")
    print("=" * 60)
    try:
        tmt_b.standardize(92, 80.0)
    except DomainError as e:
        print(f"  {e}")

    # 4. Building an engine from your own tables
    print("\n" + "=" * 60)
    print("4. CUSTOM ENGINE")
    print("=" * 60)

    engine = build_engine(
        adult_bands=[AgeBand(16, 39, 50.0, 10.0), AgeBand(40, 89, 45.0, 11.0)],
        child_regression_spec=ChildRegressionSpec([20.0, 2.5], [6.0, 0.2]),
        anchor_overrides=[AnchorOverride(10, 46.0, 8.5)],
        child_band_groups=[ChildAgeBandGroup(6, 10), ChildAgeBandGroup(11, 15)],
        child_age_range=(6, 15),
        reversed=False,
        name='Example memory test',
    )
    r = engine.standardize(12.5, 52.0)
    print(f"  age 12.5, raw 52 -> band mean {r.predicted_mean:.2f}, T {r.t_score:.0f}")


if __name__ == "__main__":
    main()
