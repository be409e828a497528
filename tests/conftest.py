import pytest


SAMPLE = """
be cfbegad cbdgef fgaecd cgeb fdcge agebfd fecdb fabcd edb | fdgacbe cefdb cefbgd gcbe
edbfga begcd cbg gc gcadebf fbgde acbgfd abcde gfcbed gfec | fcgedb cgb dgebacf gc
fgaebd cg bdaec gdafb agbcfd gdcbef bgcad gfac gcb cdgabef | cg cg fdcagb cbg
fbegcd cbd adcefb dageb afcb bc aefdc ecdab fgdeca fcdbega | efabcd cedba gadfec cb
aecbfdg fbg gf bafeg dbefa fcge gcbea fcaegb dgceab fcbdga | gecf egdcabf bgf bfgea
fgeab ca afcebg bdacfeg cfaedg gcfdb baec bfadeg bafgc acf | gebdcfa ecba ca fadegcb
dbcfg fgd bdegcaf fgec aegbdf ecdfab fbedc dacgb gdcebf gf | cefg dcbef fcge gbcadfe
bdfegc cbegaf gecbf dfcage bdacg ed bedf ced adcbefg gebcd | ed bcgafe cdgba cbgef
egadfb cdbfeg cegd fecab cgb gbdefca cg fgcdab egfdb bfceg | gbdfcae bgc cg cgb
gcafb gcf dcaebfg ecagb gf abcdeg gaef cafbge fdbac fegbdc | fgae cfgab fg bagce
"""

# Decoded value of each SAMPLE line, in order
SAMPLE_VALUES = [8394, 9781, 1197, 9361, 4873, 8418, 4548, 1625, 8717, 4315]

SINGLE = "acedgfb cdfbe gcdfa fbcad dab cefabd cdfgeb eafb cagedb ab | cdfeb fcadb cdfeb cdbaf"

CANONICAL = {
    0: "abcefg",
    1: "cf",
    2: "acdeg",
    3: "acdfg",
    4: "bcdf",
    5: "abdfg",
    6: "abdefg",
    7: "acf",
    8: "abcdefg",
    9: "abcdfg",
}


@pytest.fixture
def sample_text():
    """The ten-line worked example."""
    return SAMPLE


@pytest.fixture
def single_line():
    """One entry decoding to 5353."""
    return SINGLE


@pytest.fixture
def sample_path(tmp_path):
    """SAMPLE written to a file."""
    path = tmp_path / "input.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def sample_values():
    return list(SAMPLE_VALUES)


@pytest.fixture
def canonical():
    """digit -> unscrambled segment letters"""
    return dict(CANONICAL)
