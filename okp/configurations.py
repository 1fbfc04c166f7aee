# ============================================================
# Genetic Algorithm
# ============================================================
POP_SIZE = 100
MUTATION_RATE = 0.1
ELITISM_RATE = 0.1
MAX_ITERATIONS = 200

SEED = None                         # int for reproducible runs, None = fresh entropy
WORKERS = 1                         # >1 scores each generation in a process pool

DEBUG_F = [True, False]

# ============================================================
# Dataset / Results
# ============================================================
WD_DIR = [
    "2D-OKP-R-GA",
    "2D-OKP-R-GA-param_tuning",
]

RESULTS_DIR_NAME = WD_DIR[0]
RESULTS_ROOT = "results"

# ============================================================
# Debug / Visualization
# ============================================================
PLOT_LAYOUT = DEBUG_F[0]             # save static PNG of the best layout
PLOT_DEBUG_VIEW = DEBUG_F[1]         # interactive vedo view of the best layout

debug = DEBUG_F[1]                   # verbose per-generation prints
