# sigfit

`sigfit` estimates how strongly each mutational signature contributes to the
mutation profile of a tumour sample.

For every sample (patient) it:

1. draws bootstrap resamples of the sample's mutation profile,
2. fits signature exposures to each resample by solving a quadratic program
   (non-negative exposures that sum to one, found with the Goldfarb–Idnani dual
   method),
3. repeatedly drops the signature with the largest bootstrap p-value (the share
   of resamples in which its exposure is at or below a threshold) while that
   p-value exceeds the significance level,
4. fits the final exposures to the original sample with the remaining
   signatures.

The results are written as a CSV table with one row per patient and one column
per signature.

There are no runtime dependencies beyond the Python standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Input files

**Samples** — a table of mutation counts, one row per mutation type and one
column per patient. Tab-separated and comma-separated files are both accepted;
the format is detected from the content (a tab anywhere means tab-separated).
In a tab-separated file the first column holds the mutation type; in a
comma-separated file the first two columns are descriptive and skipped. The
patient names are taken from the header. Values that cannot be read as numbers
are logged as a warning and taken as `0`.

**Signatures** — a table with one row per mutation type (in the same order as
the samples) and one column per signature, the first column holding the
mutation type.

No signature tables are shipped with the package; supply your own file.

## Command line

```
sigfit SAMPLES [--signatures FILE] [--output FOLDER] [--threshold T]
       [--mutation-count N] [-R N] [--significance-level A]
       [--drop-zeros-columns]
```

- `SAMPLES` — the samples table.
- `--signatures` — the signatures table (default
  `data/COSMIC_v3.4_SBS_GRCh37.txt`, relative to the working directory).
- `--output` — output folder, created if missing (default `output`).
- `--threshold` — exposure at or below which a signature counts as absent in a
  resample (default `0.01`).
- `--mutation-count` — draws per bootstrap resample (default `1000`); `-1`
  takes each sample's total, which then must be whole counts.
- `-R`, `--resamples` — number of bootstrap resamples (default `100`).
- `--significance-level` — p-value above which a signature is dropped
  (default `0.01`).
- `--drop-zeros-columns` — accepted, but currently has no effect.

The command shows a progress bar, writes `Assignment_Solution_Activities.csv`
into the output folder, and prints the elapsed time. It exits with status `1`
and a message on standard error when a file cannot be read or holds no usable
data. `sigfit --help` lists the options.

## Python API

```python
from sigfit.fit import fit

path = fit(
    samples_file="tumour_counts.txt",
    output_folder="output",
    threshold=0.01,
    mutation_count=-1,         # -1: take the total from the sample counts
    R=100,
    significance_level=0.01,
    signatures_file="signatures.txt",
)
```

`fit` returns the path of the written table. Exposures are written with six
decimals; signatures eliminated for a patient get `0`. If the fit of a patient
fails, the error is logged and every signature of that patient gets `0`
(see `sigfit.fit.process_sample`).

The lower-level pieces can be used on their own:

- `sigfit.quadprog.solve_qp(G, a, C, b, meq, factorized)` minimises
  `1/2 x^T G x - a^T x` subject to `C^T x = b` for the first `meq` constraints
  and `C^T x >= b` for the rest, returning a `QPResult` with `x`, `f`, `xu`
  (the unconstrained minimiser), `iterations`, `lagrangian` and `iact`
  (0-based indices of the active constraints). It raises `ValueError` on
  mismatched shapes, `sigfit.linalg.NotPositiveDefiniteError` when `G` is not
  positive definite, and `InfeasibleError` when the constraints cannot be met.
- `sigfit.decompose.decompose_qp(m, P)` returns the non-negative exposures,
  summing to one, that best reconstruct the profile `m` from the signature
  matrix `P`.
- `sigfit.exposures.find_sig_exposures(M, P, decomposition_method)` fits every
  column of `M` and returns the exposures with their reconstruction errors
  (`frobenius_norm`).
- `sigfit.bootstrap.backward_elimination(...)` runs the bootstrap selection for
  a single sample; `bootstrapped_patient` and `compute_p_value` are its
  building blocks. Both `backward_elimination` and `bootstrapped_patient`
  accept an optional `random.Random` as `rng` for reproducible resampling.
- `sigfit.tables.load_samples(path)` and `sigfit.tables.load_signatures(path)`
  read the input tables; `detect_format(content)` reports the `FileFormat` and
  separator of a table's text.
- `sigfit.linalg` and `sigfit.qr` hold the triangular-matrix and QR-update
  helpers the solver is built on.

Matrices are plain lists of rows throughout.