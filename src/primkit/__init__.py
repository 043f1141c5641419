"""Parametric solid primitives with exact point queries and tessellation."""

from ._box import Box as Box
from ._config import DEFAULT_DIV as DEFAULT_DIV
from ._config import TOL as TOL
from ._config import PrimitiveParams as PrimitiveParams
from ._cone import Cone as Cone
from ._ellipsoid import Ellipsoid as Ellipsoid
from ._errors import MalformedInputError as MalformedInputError
from ._errors import NumericInconsistencyError as NumericInconsistencyError
from ._errors import PrimitiveError as PrimitiveError
from ._frame import Frame as Frame
from ._mesh import Mesh as Mesh
from ._primitives import Axis as Axis
from ._primitives import Primitive as Primitive
from ._primitives import PrimitiveType as PrimitiveType
from ._shape import Shape as Shape

__version__ = "0.0.0"
