"""Model file format and 24-bit BMP texture reading."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Sequence, TypeVar, Union

log = logging.getLogger(__name__)

PathLike = Union[str, Path]
_T = TypeVar("_T")


class ModelFormatError(ValueError):
    """The model text is truncated or holds a token of the wrong kind."""


class BMPError(ValueError):
    """The data is not a readable 24-bit BMP image."""


@dataclass
class TextureData:
    """A texture named by the model, with the id it got once uploaded."""

    path: str
    id: int = 0


@dataclass
class Material:
    ambient: tuple[float, float, float, float]
    diffuse: tuple[float, float, float, float]
    specular: tuple[float, float, float, float]
    emission: tuple[float, float, float, float]
    shininess: float
    texture_index: int


@dataclass(frozen=True)
class Vertex:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class TexCoord:
    u: float
    v: float


@dataclass(frozen=True)
class Normal:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Face:
    """A triangle; every index is 1-based, 0 or out of range means absent."""

    v_indices: tuple[int, int, int]
    t_indices: tuple[int, int, int]
    n_indices: tuple[int, int, int]


@dataclass
class SubModel:
    material_index: int
    faces: list[Face] = field(default_factory=list)


def _pick(items: Sequence[_T], index: int) -> Optional[_T]:
    if 0 < index <= len(items):
        return items[index - 1]
    return None


@dataclass
class Model:
    texture_file_names: list[str] = field(default_factory=list)
    textures: list[TextureData] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)
    vertices: list[Vertex] = field(default_factory=list)
    tex_coords: list[TexCoord] = field(default_factory=list)
    normals: list[Normal] = field(default_factory=list)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    sub_models: list[SubModel] = field(default_factory=list)

    def material(self, index: int) -> Optional[Material]:
        """Return the material with this 1-based index, or None if there is none."""
        return _pick(self.materials, index)

    def texture(self, index: int) -> Optional[TextureData]:
        """Return the texture with this 1-based index, or None if there is none."""
        return _pick(self.textures, index)

    def corners(
        self, face: Face
    ) -> Iterator[tuple[Optional[Vertex], Optional[TexCoord], Optional[Normal]]]:
        """Yield (vertex, tex coord, normal) for each corner; invalid indices give None."""
        for v, t, n in zip(face.v_indices, face.t_indices, face.n_indices):
            yield _pick(self.vertices, v), _pick(self.tex_coords, t), _pick(self.normals, n)


class _Tokens:
    def __init__(self, text: str) -> None:
        self._it = iter(text.split())

    def word(self, what: str) -> str:
        try:
            return next(self._it)
        except StopIteration:
            raise ModelFormatError(f"unexpected end of data while reading {what}") from None

    def integer(self, what: str) -> int:
        token = self.word(what)
        try:
            return int(token)
        except ValueError:
            raise ModelFormatError(f"expected an integer for {what}, got {token!r}") from None

    def count(self, what: str) -> int:
        value = self.integer(what)
        if value < 0:
            raise ModelFormatError(f"{what} must not be negative, got {value}")
        return value

    def number(self, what: str) -> float:
        token = self.word(what)
        try:
            return float(token)
        except ValueError:
            raise ModelFormatError(f"expected a number for {what}, got {token!r}") from None

    def numbers(self, n: int, what: str) -> tuple[float, ...]:
        return tuple(self.number(what) for _ in range(n))


def _read_material(tokens: _Tokens) -> Material:
    ambient = tokens.numbers(4, "material ambient")
    diffuse = tokens.numbers(4, "material diffuse")
    specular = tokens.numbers(4, "material specular")
    emission = tokens.numbers(4, "material emission")
    shininess = tokens.number("material shininess")
    texture_index = tokens.integer("material texture index")
    return Material(ambient, diffuse, specular, emission, shininess, texture_index)  # type: ignore[arg-type]


def _read_face(tokens: _Tokens) -> Face:
    values = [tokens.integer("face index") for _ in range(9)]
    return Face(
        v_indices=tuple(values[0::3]),  # type: ignore[arg-type]
        t_indices=tuple(values[1::3]),  # type: ignore[arg-type]
        n_indices=tuple(values[2::3]),  # type: ignore[arg-type]
    )


def _read_sub_model(tokens: _Tokens) -> SubModel:
    triangle_count = tokens.count("triangle count")
    material_index = tokens.integer("sub-model material index")
    return SubModel(material_index, [_read_face(tokens) for _ in range(triangle_count)])


def parse_model(text: str) -> Model:
    """Parse the whitespace-separated model text format."""
    tokens = _Tokens(text)
    names = [tokens.word("texture file name") for _ in range(tokens.count("texture count"))]
    materials = [_read_material(tokens) for _ in range(tokens.count("material count"))]
    vertices = [Vertex(*tokens.numbers(3, "vertex")) for _ in range(tokens.count("vertex count"))]
    tex_coords = [
        TexCoord(*tokens.numbers(2, "texture coordinate"))
        for _ in range(tokens.count("texture coordinate count"))
    ]
    normals = [Normal(*tokens.numbers(3, "normal")) for _ in range(tokens.count("normal count"))]
    sub_model_count = tokens.count("sub-model count")
    scale = tokens.numbers(3, "scale")
    sub_models = [_read_sub_model(tokens) for _ in range(sub_model_count)]
    return Model(
        texture_file_names=names,
        textures=[TextureData(path=name) for name in names],
        materials=materials,
        vertices=vertices,
        tex_coords=tex_coords,
        normals=normals,
        scale=scale,  # type: ignore[arg-type]
        sub_models=sub_models,
    )


def load_model(path: PathLike) -> Model:
    """Read and parse a model file."""
    text = Path(path).read_text()
    try:
        model = parse_model(text)
    except ModelFormatError as exc:
        raise ModelFormatError(f"{path}: {exc}") from exc
    log.info("Model %s loaded successfully", path)
    return model


_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
_BMP_MAGIC = 0x4D42


@dataclass(frozen=True)
class BMPImage:
    """Uncompressed 24-bit pixel rows as stored in the file (BGR, padded to 4 bytes)."""

    width: int
    height: int
    pixels: bytes

    @property
    def row_size(self) -> int:
        return ((self.width * 24 + 31) // 32) * 4

    @property
    def rows(self) -> int:
        return abs(self.height)


def parse_bmp(data: bytes) -> BMPImage:
    """Parse the bytes of a 24-bit BMP file."""
    if len(data) < _FILE_HEADER.size + _INFO_HEADER.size:
        raise BMPError("truncated BMP header")
    file_type, _size, _r1, _r2, pixel_offset = _FILE_HEADER.unpack_from(data, 0)
    info = _INFO_HEADER.unpack_from(data, _FILE_HEADER.size)
    width, height, bit_count = info[1], info[2], info[4]
    if file_type != _BMP_MAGIC or bit_count != 24:
        raise BMPError("not a valid 24-bit BMP file")
    if width < 0:
        raise BMPError(f"invalid BMP width {width}")
    row_size = ((width * 24 + 31) // 32) * 4
    size = row_size * abs(height)
    pixels = bytes(data[pixel_offset:pixel_offset + size]).ljust(size, b"\0")
    return BMPImage(width, height, pixels)


def read_bmp(path: PathLike) -> BMPImage:
    """Read a 24-bit BMP file from disk."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise BMPError(f"could not open BMP file {path}") from exc
    try:
        return parse_bmp(data)
    except BMPError as exc:
        raise BMPError(f"{path}: {exc}") from exc