"""Keyboard layouts: key geometry, shuffling and position lookup.

Key positions are numbered like this::

     LEFT HAND   |    RIGHT HAND
     0  1  2  3  4 |  5  6  7  8  9 10
    11 12 13 14 15 | 16 17 18 19 20 21
    22 23 24 25 26 | 27 28 29 30 31
                32 | 33 (thumb keys)
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field

NUM_KEYS = 34


class Finger(enum.Enum):
    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    PINKY = "pinky"


class Hand(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


class Row(enum.Enum):
    TOP = "top"
    HOME = "home"
    BOTTOM = "bottom"
    THUMB = "thumb"


@dataclass(frozen=True)
class KeyPress:
    """A character together with where and how it is typed."""

    kc: str
    pos: int
    finger: Finger
    hand: Hand
    row: Row
    center: bool


_P, _R, _M, _I, _T = Finger.PINKY, Finger.RING, Finger.MIDDLE, Finger.INDEX, Finger.THUMB
KEY_FINGERS = (
    _P, _R, _M, _I, _I,   _I, _I, _M, _R, _P, _P,
    _P, _R, _M, _I, _I,   _I, _I, _M, _R, _P, _P,
    _P, _R, _M, _I, _I,   _I, _I, _M, _R, _P,
    _T, _T,
)

_L, _RH = Hand.LEFT, Hand.RIGHT
KEY_HANDS = (
    (_L,) * 5 + (_RH,) * 6
    + (_L,) * 5 + (_RH,) * 6
    + (_L,) * 5 + (_RH,) * 5
    + (_L, _RH)
)

KEY_ROWS = (
    (Row.TOP,) * 11 + (Row.HOME,) * 11 + (Row.BOTTOM,) * 10 + (Row.THUMB,) * 2
)

KEY_CENTER_COLUMN = tuple(pos in (4, 5, 15, 16, 26, 27) for pos in range(NUM_KEYS))

# Positions that may be swapped, in the order random draws index them.
# Position 10 (top-right corner) stays fixed.
SWAPPABLE_POSITIONS = tuple(range(10)) + tuple(range(11, NUM_KEYS))

# Character index in a layout file for each key position; the upper layer
# follows at an offset of UPPER_LAYER_OFFSET.
LAYOUT_FILE_INDICES = (
    0, 1, 2, 3, 4,       6, 7, 8, 9, 10, 11,
    13, 14, 15, 16, 17,  19, 20, 21, 22, 23, 24,
    26, 27, 28, 29, 30,  32, 33, 34, 35, 36, 37, 38,
)
UPPER_LAYER_OFFSET = 40

_ROW_FORMAT = (
    "{} {} {} {} {} | {} {} {} {} {} {}\n"
    "{} {} {} {} {} | {} {} {} {} {} {}\n"
    "{} {} {} {} {} | {} {} {} {} {}\n"
    "        {} | {}"
)


@dataclass
class Layout:
    """A two-layer layout: ``lower`` (unshifted) and ``upper`` (shifted)."""

    lower: list = field(default_factory=lambda: ["\0"] * NUM_KEYS)
    upper: list = field(default_factory=lambda: ["\0"] * NUM_KEYS)

    def __post_init__(self):
        self.lower = list(self.lower)
        self.upper = list(self.upper)
        if len(self.lower) != NUM_KEYS or len(self.upper) != NUM_KEYS:
            raise ValueError(f"a layout layer must have exactly {NUM_KEYS} keys")

    @classmethod
    def from_string(cls, s):
        """Parse a layout file's text; missing characters become NUL."""

        def char_at(index):
            return s[index] if index < len(s) else "\0"

        return cls(
            [char_at(index) for index in LAYOUT_FILE_INDICES],
            [char_at(index + UPPER_LAYER_OFFSET) for index in LAYOUT_FILE_INDICES],
        )

    def copy(self):
        return Layout(self.lower, self.upper)

    def swap(self, i, j):
        """Exchange the keys at positions ``i`` and ``j`` on both layers."""
        for layer in (self.lower, self.upper):
            layer[i], layer[j] = layer[j], layer[i]

    def shuffle(self, times):
        """Apply ``times`` random swaps of swappable positions."""
        for _ in range(times):
            self.swap(*shuffle_position())

    def position_map(self):
        """Build a lookup from character to its KeyPress on this layout."""
        keys = {}
        for layer in (self.lower, self.upper):
            for pos, char in enumerate(layer):
                if ord(char) < 128:
                    keys[char] = KeyPress(
                        kc=char,
                        pos=pos,
                        finger=KEY_FINGERS[pos],
                        hand=KEY_HANDS[pos],
                        row=KEY_ROWS[pos],
                        center=KEY_CENTER_COLUMN[pos],
                    )
        return LayoutPosMap(keys)

    def __str__(self):
        return _ROW_FORMAT.format(*self.lower)


class LayoutPosMap:
    """Maps ASCII characters to where they sit on a layout."""

    def __init__(self, keys):
        self._keys = dict(keys)

    def key_position(self, kc):
        """Return the KeyPress for ``kc``, or None if it cannot be typed."""
        return self._keys.get(kc)

    def __contains__(self, kc):
        return kc in self._keys

    def __len__(self):
        return len(self._keys)


def shuffle_position():
    """Pick two distinct swappable positions at random."""
    count = len(SWAPPABLE_POSITIONS)
    i = random.randrange(count)
    j = random.randrange(count - 1)
    if j >= i:
        j += 1
    return SWAPPABLE_POSITIONS[i], SWAPPABLE_POSITIONS[j]


def layout_permutations(layout, depth):
    """Yield layouts reached from ``layout`` by up to ``depth`` swaps.

    The swap indices are enumerated as a sequence of ``2 * depth`` strictly
    ordered counters; each yielded layout applies them pairwise to a copy of
    the original.
    """
    if depth < 1:
        raise ValueError("permutation depth must be at least 1")
    return _permutations(layout.copy(), depth)


def _permutations(original, depth):
    limit = len(SWAPPABLE_POSITIONS)
    swap_idx = [0] * (2 * depth)
    idx, val = 1, 0
    while True:
        for k in range(idx):
            swap_idx[k] = val + idx - k

        candidate = original.copy()
        for left, right in zip(swap_idx[::2], swap_idx[1::2]):
            candidate.swap(SWAPPABLE_POSITIONS[left], SWAPPABLE_POSITIONS[right])
        yield candidate

        for k, current in enumerate(swap_idx):
            if current + 1 < limit - k:
                swap_idx[k] = current + 1
                idx, val = k, current + 1
                break
        else:
            return


def _layout(lower, upper):
    return Layout(list(lower), list(upper))


INIT_LAYOUT = _layout(
    "jcyfk" "zl,uq=" "rsthd" "mnaio'" "/vgpb" "xw.;-" "e ",
    "JCYFK" "ZL<UQ+" "RSTHD" "MNAIO\"" "?VGPB" "XW>:_" "E ",
)

QWERTY_LAYOUT = _layout(
    "qwert" "yuiop-" "asdfg" "hjkl;'" "zxcvb" "nm,./" "\0 ",
    "QWERT" "YUIOP_" "ASDFG" "HJKL:\"" "ZXCVB" "NM<>?" "\0 ",
)

DVORAK_LAYOUT = _layout(
    "',.py" "fgcrl/" "aoeui" "dhtns-" ";qjkx" "bmwvz" "\0 ",
    "\",.PY" "FGCRL?" "AOEUI" "DHTNS_" ":QJKX" "BMWVZ" "\0 ",
)

COLEMAK_LAYOUT = _layout(
    "qwfpg" "jluy;-" "arstd" "hneio'" "zxcvb" "km,./" "\0 ",
    "QWFPG" "JLUY:_" "ARSTD" "HNEIO\"" "ZXCVB" "KM<>?" "\0 ",
)

QGMLWY_LAYOUT = _layout(
    "qgmlw" "yfub;-" "dstnr" "iaeoh'" "zxcvj" "kp,./" "\0 ",
    "QGMLW" "YFUB:_" "DSTNR" "IAEOH\"" "ZXCVJ" "KP<>?" "\0 ",
)

WORKMAN_LAYOUT = _layout(
    "qdrwb" "jfup;-" "ashtg" "yneoi'" "zxmcv" "kl,./" "\0 ",
    "QDRWB" "JFUP:_" "ASHTG" "YNEOI\"" "ZXMCV" "KL<>?" "\0 ",
)

MALTRON_LAYOUT = _layout(
    "qpycb" "vmuzl=" "anisf" "dthor'" ",.jg/" ";wk-x" "e ",
    "QPYCB" "VMUZL+" "ANISF" "DTHOR\"" "<>JG?" ":WK_X" "E ",
)

MTGAP_LAYOUT = _layout(
    "ypou-" "bdlckj" "inea," "mhtsrv" "(\"'._" ")fwgx" "z ",
    "YPOU:" "BDLCKJ" "INEA;" "MHTSRV" "&?*=<" ">FWGX" "Z ",
)

CAPEWELL_LAYOUT = _layout(
    ".ywdf" "jpluq/" "aersg" "btnio-" "xzcv;" "kwh,'" "\0 ",
    ">YWDF" "JPLUQ?" "AERSG" "BTNIO_" "XZCV:" "KWH<\"" "\0 ",
)

ARENSITO_LAYOUT = _layout(
    "ql,p\0" "\0fudk\0" "arenb" "gsito\0" "zw.hj" "vcymx" "\0 ",
    "QL<P\0" "\0FUDK\0" "ARENB" "GSITO\0" "ZW>HJ" "VCYMX" "\0 ",
)