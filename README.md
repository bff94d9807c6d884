# keyopt

Search for keyboard layouts that are comfortable to type on a given body of text.

keyopt scores a layout by reading a corpus four keystrokes at a time and
adding up penalties for awkward movements: weak keys, the same finger used
twice, long row jumps, pinky/ring twists, roll reversals, long runs on one
hand, alternating hands, returning to the finger used two keystrokes ago, and
more. Inward rolls earn a small bonus. It then improves the layout by
simulated annealing, or by an exhaustive search of nearby swaps.

A layout has three letter rows plus two thumb keys (34 positions), each with
a lower and an upper (shifted) layer. The top-right corner key never moves
during a search.

## Installation

    pip install .

## Usage

    keyopt run <corpus> [layout] [OPTIONS]
    keyopt run-ref <corpus>
    keyopt refine <corpus> [layout] [OPTIONS]

- `run` repeats annealing passes from the starting layout without end. Each
  pass runs 15000 iterations and prints the best layouts it accepted. Stop it
  with Ctrl-C.
- `run-ref` scores well-known layouts (QWERTY, Dvorak, Colemak, QGMLWY,
  Workman, Maltron, MTGAP, Capewell, Arensito) and the built-in starting
  layout against the corpus, then exits.
- `refine` prints the starting layout, tests every layout within a few swaps
  of it, moves to the best one, and keeps going until no swap helps. It then
  prints the final layout under "Ultimate winner:".

With no arguments, with `-h`/`--help`, without a corpus, or with an unknown
command, the usage text is printed.

`<corpus>` is a UTF-8 text file. `[layout]` is an optional file holding a
starting layout; without it the built-in layout is used. A file that cannot
be read is reported and the program exits.

Options:

    -h, --help                       print the help text
    -d, --debug                      show debug logging
    -t, --top TOP_LAYOUTS            number of top layouts to print (default: 1)
    -s, --swaps-per-iteration SWAPS  maximum number of swaps per iteration (default: 3)

An option value that is not a whole number is reported, and the default is
used. For `run` the number of swaps must be at least 1; for `refine` the
number of top layouts must be at least 1.

## Layout files

A layout file is read by character position. The lower layer is written as
three lines; the upper layer follows in the same shape, starting at the 41st
character:

    jcyfk zl,uq=
    rsthd mnaio'
    /vgpb xw.;-e 
    JCYFK ZL<UQ+
    RSTHD MNAIO"
    ?VGPB XW>:_E 

On each line the left-hand keys come before the separating space and the
right-hand keys after it. The last two characters of the third line are the
left and right thumb keys (here `e` and a space). Characters missing from a
short file become empty keys.

## Output

Each result prints the layout's lower layer, the total and length-scaled
penalty, and then one line per penalty kind with up to five key sequences
that cost the most under it.

## Library use

    from keyopt.layout import Layout, INIT_LAYOUT
    from keyopt import penalty

    text = open("corpus.txt", encoding="utf-8").read()
    quartads = penalty.prepare_quartad_list(text, INIT_LAYOUT.position_map())
    base = Layout.from_string(open("layout.txt", encoding="utf-8").read())
    score = penalty.calculate_penalty(quartads, len(text), base, penalty.init(), True)
    print(score.total, score.scaled)

`calculate_penalty` returns a `PenaltySummary` with `total`, `scaled` and,
when asked for details, one `KeyPenaltyResult` per rule in `results`.
`keyopt.simulator` provides `simulate`, `refine`, `format_result` and
`print_result`; `keyopt.layout.layout_permutations` yields the layouts within
a given number of swaps.

## What it does not do

keyopt keeps no state between runs: results are only printed, never saved,
and a search always starts again from the layout it is given.