"""
Таблицы геометрии marching squares (GeometryTable).

Локальная система координат ячейки: опорная точка - узел (x+1, y+1) сетки,
т.е. центр marching-ячейки. Ячейка занимает [-1/2, 1/2] по обеим осям,
смещения задаются в долях размера ячейки.

                 NNW   N   NNE
            NW ---+----+----+--- NE
               |                 |
           WNW +                 + ENE
             W +        .        + E
           WSW +                 + ESE
               |                 |
            SW ---+----+----+--- SE
                 SSW   S   SSE

Углы ячейки: SW = current (x, y), SE = right (x+1, y),
NE = topRight (x+1, y+1), NW = top (x, y+1).

Правило, которое кэшируют таблицы: точка пересечения лежит в середине
ребра, если цифры его концов отличаются на 1, и в точках 1/3 и 2/3 ребра,
если отличаются на 2. Каждый уровень полосы (lo, hi) решается как отдельная
бинарная задача; седловую неоднозначность уровня разрешает среднее значение
ячейки. Все многоугольники обходятся против часовой стрелки, начиная с первой
вершины при обходе границы ячейки против часовой стрелки от угла SW.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

from contours.errors import UnsupportedCode
from shared.constants import CELL_HALF_EXTENT, CELL_THIRD_OFFSET

if TYPE_CHECKING:
    from collections.abc import Mapping

Point = tuple[float, float]
Segment = tuple[Point, Point]
Polygon = tuple[Point, ...]


class ContourKind(str, Enum):
    ISOLINE = 'ISOLINE'
    ISOBAND = 'ISOBAND'


HALF = CELL_HALF_EXTENT
SIXTH = CELL_THIRD_OFFSET

# --- Середины рёбер
N: Point = (0.0, HALF)
E: Point = (HALF, 0.0)
S: Point = (0.0, -HALF)
W: Point = (-HALF, 0.0)

# --- Углы ячейки
NE: Point = (HALF, HALF)
NW: Point = (-HALF, HALF)
SE: Point = (HALF, -HALF)
SW: Point = (-HALF, -HALF)

# --- Точки 1/3 и 2/3 рёбер (первая буква - ребро, остальные - ближний угол)
SSW: Point = (-SIXTH, -HALF)
SSE: Point = (SIXTH, -HALF)
ESE: Point = (HALF, -SIXTH)
ENE: Point = (HALF, SIXTH)
NNE: Point = (SIXTH, HALF)
NNW: Point = (-SIXTH, HALF)
WNW: Point = (-HALF, SIXTH)
WSW: Point = (-HALF, -SIXTH)

ANCHORS: Mapping[str, Point] = MappingProxyType({
    'N': N, 'E': E, 'S': S, 'W': W,
    'NE': NE, 'NW': NW, 'SE': SE, 'SW': SW,
    'SSW': SSW, 'SSE': SSE, 'ESE': ESE, 'ENE': ENE,
    'NNE': NNE, 'NNW': NNW, 'WNW': WNW, 'WSW': WSW,
})

IsolineEntry = Union[tuple[Segment, ...], 'Mapping[int, tuple[Segment, ...]]']
IsobandEntry = Union[tuple[Polygon, ...], 'Mapping[int, tuple[Polygon, ...]]']

# ---------------------------------------------------------------------------
# Isolines
# ---------------------------------------------------------------------------
# Ключ - code = top*8 + topRight*4 + right*2 + current.
# Значение - кортеж отрезков (start, end) либо, для седловых кодов 5 и 10,
# отображение mean_code -> отрезки. mean_code = 0: центр ниже порога, верхние
# углы отсекаются по отдельности; mean_code = 1: верхние углы соединены.
ISOLINES_CODE_OFFSET_MAP: Mapping[int, IsolineEntry] = MappingProxyType({
    0: (),
    1: ((W, S),),
    2: ((S, E),),
    3: ((W, E),),
    4: ((N, E),),
    5: MappingProxyType({
        0: ((W, S), (N, E)),
        1: ((W, N), (S, E)),
    }),
    6: ((N, S),),
    7: ((W, N),),
    8: ((W, N),),
    9: ((N, S),),
    10: MappingProxyType({
        0: ((W, N), (S, E)),
        1: ((W, S), (N, E)),
    }),
    11: ((N, E),),
    12: ((W, E),),
    13: ((S, E),),
    14: ((W, S),),
    15: (),
})

# ---------------------------------------------------------------------------
# Isobands
# ---------------------------------------------------------------------------
# Треугольники
SW_TRIANGLE: Polygon = (SW, S, W)
SE_TRIANGLE: Polygon = (S, SE, E)
NE_TRIANGLE: Polygon = (E, NE, N)
NW_TRIANGLE: Polygon = (N, NW, W)

# Трапеции (полоса вокруг угла, перепад 0 <-> 2 на двух рёбрах)
SW_TRAPEZOID: Polygon = (SSW, SSE, WNW, WSW)
SE_TRAPEZOID: Polygon = (SSW, SSE, ESE, ENE)
NE_TRAPEZOID: Polygon = (ESE, ENE, NNE, NNW)
NW_TRAPEZOID: Polygon = (NNE, NNW, WNW, WSW)

# Прямоугольники: половины ячейки и полосы через всю ячейку
S_RECTANGLE: Polygon = (SW, SE, E, W)
E_RECTANGLE: Polygon = (S, SE, NE, N)
N_RECTANGLE: Polygon = (E, NE, NW, W)
W_RECTANGLE: Polygon = (SW, S, N, NW)
HORIZONTAL_RECTANGLE: Polygon = (ESE, ENE, WNW, WSW)
VERTICAL_RECTANGLE: Polygon = (SSW, SSE, NNE, NNW)

SQUARE: Polygon = (SW, SE, NE, NW)

# Шести-, семи- и восьмиугольники, в которые сливаются пары фигур
SW_NE_HEXAGON: Polygon = (SW, S, E, NE, N, W)
SE_NW_HEXAGON: Polygon = (S, SE, E, N, NW, W)
OCTAGON: Polygon = (SSW, SSE, ESE, ENE, NNE, NNW, WNW, WSW)

# Ключ - code = top*64 + topRight*16 + right*4 + current, записан побитово:
# по 2 бита на угол (00 -> 0, 01 -> 1, 10 -> 2) в порядке top, topRight,
# right, current. Комментарий над записью - те же цифры в десятичном виде.
ISOBANDS_CODE_OFFSET_MAP: Mapping[int, IsobandEntry] = MappingProxyType({
    # no contours
    # 0000
    0b00_00_00_00: (),
    # 2222
    0b10_10_10_10: (),

    # single triangle
    # 0001
    0b00_00_00_01: (SW_TRIANGLE,),
    # 0010
    0b00_00_01_00: (SE_TRIANGLE,),
    # 0100
    0b00_01_00_00: (NE_TRIANGLE,),
    # 1000
    0b01_00_00_00: (NW_TRIANGLE,),
    # 2221
    0b10_10_10_01: (SW_TRIANGLE,),
    # 2212
    0b10_10_01_10: (SE_TRIANGLE,),
    # 2122
    0b10_01_10_10: (NE_TRIANGLE,),
    # 1222
    0b01_10_10_10: (NW_TRIANGLE,),

    # single trapezoid
    # 0002
    0b00_00_00_10: (SW_TRAPEZOID,),
    # 0020
    0b00_00_10_00: (SE_TRAPEZOID,),
    # 0200
    0b00_10_00_00: (NE_TRAPEZOID,),
    # 2000
    0b10_00_00_00: (NW_TRAPEZOID,),
    # 2220
    0b10_10_10_00: (SW_TRAPEZOID,),
    # 2202
    0b10_10_00_10: (SE_TRAPEZOID,),
    # 2022
    0b10_00_10_10: (NE_TRAPEZOID,),
    # 0222
    0b00_10_10_10: (NW_TRAPEZOID,),

    # single rectangle
    # 0011
    0b00_00_01_01: (S_RECTANGLE,),
    # 0110
    0b00_01_01_00: (E_RECTANGLE,),
    # 1100
    0b01_01_00_00: (N_RECTANGLE,),
    # 1001
    0b01_00_00_01: (W_RECTANGLE,),
    # 2211
    0b10_10_01_01: (S_RECTANGLE,),
    # 2112
    0b10_01_01_10: (E_RECTANGLE,),
    # 1122
    0b01_01_10_10: (N_RECTANGLE,),
    # 1221
    0b01_10_10_01: (W_RECTANGLE,),
    # 2200
    0b10_10_00_00: (HORIZONTAL_RECTANGLE,),
    # 0022
    0b00_00_10_10: (HORIZONTAL_RECTANGLE,),
    # 2002
    0b10_00_00_10: (VERTICAL_RECTANGLE,),
    # 0220
    0b00_10_10_00: (VERTICAL_RECTANGLE,),

    # single square
    # 1111
    0b01_01_01_01: (SQUARE,),

    # single pentagon
    # 1211
    0b01_10_01_01: ((SW, SE, E, N, NW),),
    # 2111
    0b10_01_01_01: ((SW, SE, NE, N, W),),
    # 1112
    0b01_01_01_10: ((S, SE, NE, NW, W),),
    # 1121
    0b01_01_10_01: ((SW, S, E, NE, NW),),
    # 1011
    0b01_00_01_01: ((SW, SE, E, N, NW),),
    # 0111
    0b00_01_01_01: ((SW, SE, NE, N, W),),
    # 1110
    0b01_01_01_00: ((S, SE, NE, NW, W),),
    # 1101
    0b01_01_00_01: ((SW, S, E, NE, NW),),
    # 1200
    0b01_10_00_00: ((ESE, ENE, N, NW, W),),
    # 0120
    0b00_01_10_00: ((SSW, SSE, E, NE, N),),
    # 0012
    0b00_00_01_10: ((S, SE, E, WNW, WSW),),
    # 2001
    0b10_00_00_01: ((SW, S, NNE, NNW, W),),
    # 1022
    0b01_00_10_10: ((ESE, ENE, N, NW, W),),
    # 2102
    0b10_01_00_10: ((SSW, SSE, E, NE, N),),
    # 2210
    0b10_10_01_00: ((S, SE, E, WNW, WSW),),
    # 0221
    0b00_10_10_01: ((SW, S, NNE, NNW, W),),
    # 1002
    0b01_00_00_10: ((SSW, SSE, N, NW, W),),
    # 2100
    0b10_01_00_00: ((E, NE, N, WNW, WSW),),
    # 0210
    0b00_10_01_00: ((S, SE, E, NNE, NNW),),
    # 0021
    0b00_00_10_01: ((SW, S, ESE, ENE, W),),
    # 1220
    0b01_10_10_00: ((SSW, SSE, N, NW, W),),
    # 0122
    0b00_01_10_10: ((E, NE, N, WNW, WSW),),
    # 2012
    0b10_00_01_10: ((S, SE, E, NNE, NNW),),
    # 2201
    0b10_10_00_01: ((SW, S, ESE, ENE, W),),

    # single hexagon
    # 0211
    0b00_10_01_01: ((SW, SE, E, NNE, NNW, W),),
    # 2110
    0b10_01_01_00: ((S, SE, NE, N, WNW, WSW),),
    # 1102
    0b01_01_00_10: ((SSW, SSE, E, NE, NW, W),),
    # 1021
    0b01_00_10_01: ((SW, S, ESE, ENE, N, NW),),
    # 2011
    0b10_00_01_01: ((SW, SE, E, NNE, NNW, W),),
    # 0112
    0b00_01_01_10: ((S, SE, NE, N, WNW, WSW),),
    # 1120
    0b01_01_10_00: ((SSW, SSE, E, NE, NW, W),),
    # 1201
    0b01_10_00_01: ((SW, S, ESE, ENE, N, NW),),
    # 2101
    0b10_01_00_01: (SW_NE_HEXAGON,),
    # 0121
    0b00_01_10_01: (SW_NE_HEXAGON,),
    # 1012
    0b01_00_01_10: (SE_NW_HEXAGON,),
    # 1210
    0b01_10_01_00: (SE_NW_HEXAGON,),

    # 6-sided polygons based on mean weight
    # (mean_code за пределами цифр углов недостижим и повторяет соседний)
    # 0101
    0b00_01_00_01: MappingProxyType({
        0: (SW_TRIANGLE, NE_TRIANGLE),
        1: (SW_NE_HEXAGON,),
        2: (SW_NE_HEXAGON,),
    }),
    # 1010
    0b01_00_01_00: MappingProxyType({
        0: (SE_TRIANGLE, NW_TRIANGLE),
        1: (SE_NW_HEXAGON,),
        2: (SE_NW_HEXAGON,),
    }),
    # 2121
    0b10_01_10_01: MappingProxyType({
        0: (SW_NE_HEXAGON,),
        1: (SW_NE_HEXAGON,),
        2: (SW_TRIANGLE, NE_TRIANGLE),
    }),
    # 1212
    0b01_10_01_10: MappingProxyType({
        0: (SE_NW_HEXAGON,),
        1: (SE_NW_HEXAGON,),
        2: (SE_TRIANGLE, NW_TRIANGLE),
    }),

    # 7-sided polygons based on mean weight
    # (разделение задаёт только граница, которую пересекают противоположные
    # углы; два других mean_code достижимы и дают одну и ту же геометрию)
    # 2120
    0b10_01_10_00: MappingProxyType({
        0: ((SSW, SSE, E, NE, N, WNW, WSW),),
        1: ((SSW, SSE, E, NE, N, WNW, WSW),),
        2: (SW_TRAPEZOID, NE_TRIANGLE),
    }),
    # 2021
    0b10_00_10_01: MappingProxyType({
        0: ((SW, S, ESE, ENE, NNE, NNW, W),),
        1: ((SW, S, ESE, ENE, NNE, NNW, W),),
        2: (SW_TRIANGLE, NE_TRAPEZOID),
    }),
    # 1202
    0b01_10_00_10: MappingProxyType({
        0: ((SSW, SSE, ESE, ENE, N, NW, W),),
        1: ((SSW, SSE, ESE, ENE, N, NW, W),),
        2: (SE_TRAPEZOID, NW_TRIANGLE),
    }),
    # 0212
    0b00_10_01_10: MappingProxyType({
        0: ((S, SE, E, NNE, NNW, WNW, WSW),),
        1: ((S, SE, E, NNE, NNW, WNW, WSW),),
        2: (SE_TRIANGLE, NW_TRAPEZOID),
    }),
    # 0102
    0b00_01_00_10: MappingProxyType({
        0: (SW_TRAPEZOID, NE_TRIANGLE),
        1: ((SSW, SSE, E, NE, N, WNW, WSW),),
        2: ((SSW, SSE, E, NE, N, WNW, WSW),),
    }),
    # 0201
    0b00_10_00_01: MappingProxyType({
        0: (SW_TRIANGLE, NE_TRAPEZOID),
        1: ((SW, S, ESE, ENE, NNE, NNW, W),),
        2: ((SW, S, ESE, ENE, NNE, NNW, W),),
    }),
    # 1020
    0b01_00_10_00: MappingProxyType({
        0: (SE_TRAPEZOID, NW_TRIANGLE),
        1: ((SSW, SSE, ESE, ENE, N, NW, W),),
        2: ((SSW, SSE, ESE, ENE, N, NW, W),),
    }),
    # 2010
    0b10_00_01_00: MappingProxyType({
        0: (SE_TRIANGLE, NW_TRAPEZOID),
        1: ((S, SE, E, NNE, NNW, WNW, WSW),),
        2: ((S, SE, E, NNE, NNW, WNW, WSW),),
    }),

    # 8-sided polygons based on mean weight
    # 2020
    0b10_00_10_00: MappingProxyType({
        0: (SE_TRAPEZOID, NW_TRAPEZOID),
        1: (OCTAGON,),
        2: (SW_TRAPEZOID, NE_TRAPEZOID),
    }),
    # 0202
    0b00_10_00_10: MappingProxyType({
        0: (SW_TRAPEZOID, NE_TRAPEZOID),
        1: (OCTAGON,),
        2: (SE_TRAPEZOID, NW_TRAPEZOID),
    }),
})

_TABLES: Mapping[ContourKind, Mapping[int, IsolineEntry | IsobandEntry]] = (
    MappingProxyType({
        ContourKind.ISOLINE: ISOLINES_CODE_OFFSET_MAP,
        ContourKind.ISOBAND: ISOBANDS_CODE_OFFSET_MAP,
    })
)


def is_ambiguous(code: int, kind: ContourKind) -> bool:
    """True if the geometry for ``code`` depends on the cell mean."""
    entry = _TABLES[ContourKind(kind)].get(code)
    return entry is not None and not isinstance(entry, tuple)


def get_geometry(
    code: int, mean_code: int, kind: ContourKind
) -> tuple[Segment, ...] | tuple[Polygon, ...]:
    """
    Resolve the canonical local geometry for a cell.

    Returns line segments for :attr:`ContourKind.ISOLINE` and closed
    counter-clockwise polygons for :attr:`ContourKind.ISOBAND`. Ambiguous
    codes are already resolved by ``mean_code``. A miss raises
    :class:`UnsupportedCode`; an empty tuple means "no contour".
    """
    kind = ContourKind(kind)
    entry = _TABLES[kind].get(code)
    if entry is None:
        raise UnsupportedCode(code, mean_code, kind.value)
    if isinstance(entry, tuple):
        return entry
    try:
        return entry[mean_code]
    except KeyError:
        raise UnsupportedCode(code, mean_code, kind.value) from None


def get_isoline_segments(code: int, mean_code: int = 0) -> tuple[Segment, ...]:
    return get_geometry(code, mean_code, ContourKind.ISOLINE)  # type: ignore[return-value]


def get_isoband_polygons(code: int, mean_code: int = 0) -> tuple[Polygon, ...]:
    return get_geometry(code, mean_code, ContourKind.ISOBAND)  # type: ignore[return-value]
