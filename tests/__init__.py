from pathlib import Path
import sys

# Prefer the in-tree aethokit package over any installed copy
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
