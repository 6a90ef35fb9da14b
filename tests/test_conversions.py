"""
Tests for the direct conversion edges.
"""

import math

import numpy as np
import pytest

from prismatic.conversions import cie, cylindrical, rgb, video
from prismatic.conversions.common import apply_matrix, frozen_matrix, to_byte
from prismatic.core.data_types import (
    HSL,
    HSV,
    RGB,
    RGB8,
    XYZ,
    YUV,
    LCHab,
    LCHuv,
    LinearRGB,
    Lab,
    Luv,
    MatrixStandard,
    YCbCr,
    make_flags,
    xyY,
)
from prismatic.exceptions import InvalidChannelError, InvalidFlagsError, PrismaticError


class TestCommon:
    """Tests for the shared matrix helpers."""

    def test_frozen_matrix_is_read_only(self):
        matrix = frozen_matrix([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
        with pytest.raises(ValueError):
            matrix[0, 0] = 2.0

    def test_frozen_matrix_shape(self):
        with pytest.raises(ValueError):
            frozen_matrix([[1, 0], [0, 1]])

    def test_apply_matrix(self):
        matrix = frozen_matrix([[1, 2, 3], [0, 1, 0], [0, 0, 2]])
        result = apply_matrix(matrix, 1.0, 1.0, 1.0)
        assert result == (6.0, 1.0, 2.0)
        assert all(isinstance(c, float) for c in result)

    def test_matrices_are_frozen(self):
        for matrix in (*video.RGB_TO_YUV.values(), cie.LINEAR_RGB_TO_XYZ):
            assert not matrix.flags.writeable

    @pytest.mark.parametrize("value,expected", [
        (-3.0, 0), (0.4, 0), (127.99, 127), (255.4, 255), (400.0, 255),
    ])
    def test_to_byte(self, value, expected):
        assert to_byte(value) == expected

    def test_to_byte_rejects_nan(self):
        with pytest.raises(InvalidChannelError):
            to_byte(float("nan"))


class TestRGBEdges:
    """Quantization and transfer function edges."""

    def test_rgb8_to_rgb(self):
        result = rgb.rgb8_to_rgb(RGB8(255, 0, 51))
        assert result.components() == pytest.approx((1.0, 0.0, 0.2))

    def test_rgb_to_rgb8_rounds_half_up(self):
        assert rgb.rgb_to_rgb8(RGB(1.0, 0.5, 0.0)) == RGB8(255, 128, 0)

    def test_rgb_to_rgb8_clamps(self):
        assert rgb.rgb_to_rgb8(RGB(-0.2, 1.3, 0.5)) == RGB8(0, 255, 128)

    @pytest.mark.parametrize("linear,code", [
        (-0.1, 0), (0.0, 0), (0.5, 188), (1.0, 255), (2.0, 255),
    ])
    def test_linear_rgb_to_rgb8(self, linear, code):
        assert rgb.linear_rgb_to_rgb8(LinearRGB(linear, linear, linear)) == RGB8(code, code, code)

    def test_linear_rgb_to_rgb8_rejects_nan(self):
        with pytest.raises(InvalidChannelError):
            rgb.linear_rgb_to_rgb8(LinearRGB(0.5, float("nan"), 0.5))

    def test_rgb_to_rgb8_rejects_nan(self):
        with pytest.raises(InvalidChannelError):
            rgb.rgb_to_rgb8(RGB(float("nan"), 0.5, 0.5))

    def test_rgb8_linear_matches_two_step(self):
        """The direct 8-bit decode agrees with decoding through RGB."""
        for code in range(256):
            direct = rgb.rgb8_to_linear_rgb(RGB8(code, code, code))
            two_step = rgb.rgb_to_linear_rgb(rgb.rgb8_to_rgb(RGB8(code, code, code)))
            assert direct.r == pytest.approx(two_step.r, rel=1e-12, abs=1e-15)

    def test_rgb8_linear_round_trip(self):
        """Every 8-bit code survives a trip through linear light."""
        for code in range(256):
            value = RGB8(code, 255 - code, code // 2)
            assert rgb.linear_rgb_to_rgb8(rgb.rgb8_to_linear_rgb(value)) == value

    def test_transfer_function_round_trip(self):
        value = RGB(0.02, 0.5, 0.95)
        restored = rgb.linear_rgb_to_rgb(rgb.rgb_to_linear_rgb(value))
        assert restored.components() == pytest.approx(value.components(), rel=1e-12)


class TestCylindricalEdges:
    """HSL and HSV edges."""

    def test_gray_to_hsl(self):
        assert cylindrical.rgb_to_hsl(RGB(0.5, 0.5, 0.5)) == HSL(0.0, 0.0, 0.5)

    def test_black_to_hsv(self):
        assert cylindrical.rgb_to_hsv(RGB(0.0, 0.0, 0.0)) == HSV(0.0, 0.0, 0.0)

    @pytest.mark.parametrize("value,expected", [
        (RGB(1.0, 0.0, 0.0), (0.0, 1.0, 0.5)),
        (RGB(0.0, 1.0, 0.0), (2.0, 1.0, 0.5)),
        (RGB(0.0, 0.0, 1.0), (4.0, 1.0, 0.5)),
        (RGB(1.0, 0.0, 1.0), (5.0, 1.0, 0.5)),
    ])
    def test_primaries_to_hsl(self, value, expected):
        assert cylindrical.rgb_to_hsl(value).components() == pytest.approx(expected)

    def test_hsl_to_rgb(self):
        assert cylindrical.hsl_to_rgb(HSL(2.0, 1.0, 0.5)).components() == pytest.approx((0.0, 1.0, 0.0))

    def test_hsv_to_rgb(self):
        assert cylindrical.hsv_to_rgb(HSV(4.0, 1.0, 1.0)).components() == pytest.approx((0.0, 0.0, 1.0))

    def test_negative_hue_wraps(self):
        """A hue of -1 is the same as 5 (magenta)."""
        assert cylindrical.hsl_to_rgb(HSL(-1.0, 1.0, 0.5)).components() == pytest.approx((1.0, 0.0, 1.0))

    def test_zero_saturation_is_gray(self):
        assert cylindrical.hsv_to_rgb(HSV(3.7, 0.0, 0.25)) == RGB(0.25, 0.25, 0.25)

    def test_hue_range(self):
        """Hue stays in [0, 6) even for a tiny negative sector offset."""
        hsv = cylindrical.rgb_to_hsv(RGB(1.0, 0.5, math.nextafter(0.5, 1.0)))
        assert 0.0 <= hsv.h < 6.0
        hsv = cylindrical.rgb_to_hsv(RGB(1.0, 0.2, 0.7))
        assert 0.0 <= hsv.h < 6.0

    @pytest.mark.parametrize("edge,inverse", [
        (cylindrical.rgb_to_hsl, cylindrical.hsl_to_rgb),
        (cylindrical.rgb_to_hsv, cylindrical.hsv_to_rgb),
    ])
    def test_round_trip(self, edge, inverse):
        for value in (RGB(0.3, 0.5, 0.7), RGB(0.9, 0.1, 0.4), RGB(0.2, 0.8, 0.1)):
            restored = inverse(edge(value))
            assert restored.components() == pytest.approx(value.components(), rel=1e-12)


class TestVideoEdges:
    """YUV, YCbCr, YDbDr and YIQ edges."""

    def test_rgb_to_yuv_uses_flags(self):
        value = RGB(0.3, 0.5, 0.7)
        yuv = video.rgb_to_yuv(value, MatrixStandard.REC709)
        assert yuv.matrix is MatrixStandard.REC709
        assert yuv.y == pytest.approx(0.2126 * 0.3 + 0.7152 * 0.5 + 0.0722 * 0.7)

    @pytest.mark.parametrize("matrix", list(MatrixStandard))
    def test_yuv_round_trip(self, matrix):
        value = RGB(0.3, 0.5, 0.7)
        restored = video.yuv_to_rgb(video.rgb_to_yuv(value, matrix))
        assert restored.components() == pytest.approx(value.components(), rel=1e-12)

    @pytest.mark.parametrize("matrix", list(MatrixStandard))
    def test_white_has_no_chroma(self, matrix):
        yuv = video.rgb_to_yuv(RGB(1.0, 1.0, 1.0), matrix)
        assert yuv.components() == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)

    def test_yuv_reparameterize(self):
        """Switching matrix equals applying the new matrix to the reconstructed RGB."""
        value = RGB(0.3, 0.5, 0.7)
        yuv601 = video.rgb_to_yuv(value, MatrixStandard.REC601)
        yuv709 = video.yuv_to_yuv(yuv601, MatrixStandard.REC709)

        expected = video.rgb_to_yuv(video.yuv_to_rgb(yuv601), MatrixStandard.REC709)
        assert yuv709 == expected
        assert yuv709.components() == pytest.approx(
            video.rgb_to_yuv(value, MatrixStandard.REC709).components(), rel=1e-12
        )

    def test_yuv_reparameterize_noop_rejected(self):
        with pytest.raises(InvalidFlagsError):
            video.yuv_to_yuv(YUV(0.5, 0.0, 0.0, matrix=MatrixStandard.FCC), MatrixStandard.FCC)

    def test_studio_black_and_white(self):
        black = video.yuv_to_ycbcr(YUV(0.0, 0.0, 0.0), 0)
        assert black == YCbCr(16, 128, 128)

        white = video.yuv_to_ycbcr(video.rgb_to_yuv(RGB(1.0, 1.0, 1.0)), 0)
        assert white == YCbCr(235, 128, 128)

    def test_full_range_black(self):
        black = video.yuv_to_ycbcr(YUV(0.0, 0.0, 0.0), make_flags(0, full_range=True))
        assert black == YCbCr(0, 128, 128, full_range=True)

    def test_full_range_neutral_decodes_without_chroma(self):
        """Full-range chroma is centred on 128, like studio range."""
        full = make_flags(0, full_range=True)
        yuv = video.ycbcr_to_yuv(YCbCr(128, 128, 128, full_range=True), full)
        assert (yuv.u, yuv.v) == (0.0, 0.0)
        assert yuv.y == pytest.approx(128.0 / 255.0)

        gray = video.yuv_to_ycbcr(video.rgb_to_yuv(RGB(0.5, 0.5, 0.5)), full)
        assert (gray.cb, gray.cr) == (128, 128)

    def test_full_range_chroma_round_trip(self):
        """Encode then decode moves chroma by at most half a code."""
        full = make_flags(0, full_range=True)
        for u, v in ((0.1, -0.2), (-0.3, 0.25), (0.0, 0.0)):
            decoded = video.ycbcr_to_yuv(video.yuv_to_ycbcr(YUV(0.5, u, v), full), full)
            assert abs(decoded.u - u) <= 0.5 * 109.0 / 31875.0 + 1e-12
            assert abs(decoded.v - v) <= 0.5 * 41.0 / 8500.0 + 1e-12

    def test_ycbcr_rejects_nan(self):
        with pytest.raises(PrismaticError):
            video.yuv_to_ycbcr(YUV(float("nan"), 0.0, 0.0), 0)

    def test_studio_chroma_extremes(self):
        """Studio chroma spans [16, 240]."""
        low = video.yuv_to_ycbcr(YUV(0.5, -video.U_MAX, -video.V_MAX), 0)
        high = video.yuv_to_ycbcr(YUV(0.5, video.U_MAX, video.V_MAX), 0)
        assert (low.cb, low.cr) == (16, 16)
        assert (high.cb, high.cr) == (240, 240)

    def test_ycbcr_clamps(self):
        value = video.yuv_to_ycbcr(YUV(1.5, 0.6, -0.9), 0)
        assert value.y == 255
        assert value.cb == 255
        assert value.cr == 0

    def test_ycbcr_to_yuv_inverts_rescale(self):
        assert video.ycbcr_to_yuv(YCbCr(16, 128, 128), 0) == YUV(0.0, 0.0, 0.0)
        full = video.ycbcr_to_yuv(YCbCr(255, 128, 128, full_range=True), 0)
        assert full.y == pytest.approx(1.0)

    def test_yuv_to_ycbcr_switches_matrix(self):
        yuv = video.rgb_to_yuv(RGB(0.3, 0.5, 0.7), MatrixStandard.REC601)
        ycbcr = video.yuv_to_ycbcr(yuv, MatrixStandard.REC709)
        assert ycbcr.matrix is MatrixStandard.REC709
        expected = video.yuv_to_ycbcr(video.yuv_to_yuv(yuv, MatrixStandard.REC709), MatrixStandard.REC709)
        assert ycbcr == expected

    def test_ycbcr_to_yuv_switches_matrix(self):
        yuv = video.ycbcr_to_yuv(YCbCr(100, 90, 160, matrix=MatrixStandard.REC709), MatrixStandard.FCC)
        assert yuv.matrix is MatrixStandard.FCC

    def test_ycbcr_reparameterize(self):
        value = YCbCr(100, 90, 160)
        full = video.ycbcr_to_ycbcr(value, make_flags(0, full_range=True))
        assert full.full_range
        assert full.matrix is MatrixStandard.REC601

    def test_ycbcr_reparameterize_noop_rejected(self):
        with pytest.raises(InvalidFlagsError):
            video.ycbcr_to_ycbcr(YCbCr(100, 90, 160, full_range=True), make_flags(0, full_range=True))

    @pytest.mark.parametrize("edge,inverse", [
        (video.rgb_to_ydbdr, video.ydbdr_to_rgb),
        (video.rgb_to_yiq, video.yiq_to_rgb),
    ])
    def test_fixed_matrix_round_trip(self, edge, inverse):
        value = RGB(0.3, 0.5, 0.7)
        restored = inverse(edge(value))
        assert restored.components() == pytest.approx(value.components(), rel=1e-9)

    def test_ydbdr_yiq_shortcut(self):
        """The direct YDbDr <-> YIQ matrices agree with going through RGB."""
        value = RGB(0.3, 0.5, 0.7)
        ydbdr = video.rgb_to_ydbdr(value)
        yiq = video.rgb_to_yiq(value)

        assert video.ydbdr_to_yiq(ydbdr).components() == pytest.approx(yiq.components(), abs=1e-9)
        assert video.yiq_to_ydbdr(yiq).components() == pytest.approx(ydbdr.components(), abs=1e-9)


class TestCIEEdges:
    """XYZ, xyY, Lab, Luv and polar edges."""

    def test_white_point(self):
        xyz = cie.linear_rgb_to_xyz(LinearRGB(1.0, 1.0, 1.0))
        assert xyz.components() == pytest.approx((cie.REF_X, 1.0, cie.REF_Z), rel=1e-12)

    def test_xyz_matrices_are_inverse(self):
        product = cie.XYZ_TO_LINEAR_RGB @ cie.LINEAR_RGB_TO_XYZ
        np.testing.assert_allclose(product, np.eye(3), atol=1e-12)

    def test_white_to_lab(self):
        lab = cie.linear_rgb_to_lab(LinearRGB(1.0, 1.0, 1.0))
        assert lab.components() == pytest.approx((100.0, 0.0, 0.0), abs=1e-9)

    def test_lab_shortcut_matches_xyz(self):
        """Linear RGB -> Lab agrees with Linear RGB -> XYZ -> Lab."""
        value = LinearRGB(0.2, 0.4, 0.05)
        direct = cie.linear_rgb_to_lab(value)
        via_xyz = cie.xyz_to_lab(cie.linear_rgb_to_xyz(value))
        assert direct.components() == pytest.approx(via_xyz.components(), rel=1e-9, abs=1e-9)

        back = cie.lab_to_linear_rgb(direct)
        assert back.components() == pytest.approx(value.components(), rel=1e-9)

    def test_lab_black(self):
        xyz = cie.lab_to_xyz(Lab(0.0, 0.0, 0.0))
        assert xyz.components() == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)

    def test_lab_linear_segment(self):
        """L <= 8 uses the linear segment for Y."""
        xyz = cie.lab_to_xyz(Lab(5.0, 0.0, 0.0))
        assert xyz.y == pytest.approx(5.0 * 27.0 / 24389.0, rel=1e-12)

        lab = cie.xyz_to_lab(xyz)
        assert lab.components() == pytest.approx((5.0, 0.0, 0.0), abs=1e-9)

    def test_lab_round_trip(self):
        value = XYZ(0.3, 0.4, 0.2)
        restored = cie.lab_to_xyz(cie.xyz_to_lab(value))
        assert restored.components() == pytest.approx(value.components(), rel=1e-9)

    def test_luv_round_trip(self):
        value = XYZ(0.3, 0.4, 0.2)
        restored = cie.luv_to_xyz(cie.xyz_to_luv(value))
        assert restored.components() == pytest.approx(value.components(), rel=1e-9)

    def test_luv_white_has_no_chroma(self):
        luv = cie.xyz_to_luv(XYZ(cie.REF_X, 1.0, cie.REF_Z))
        assert luv.components() == pytest.approx((100.0, 0.0, 0.0), abs=1e-9)

    def test_luv_zero_lightness_is_black(self):
        assert cie.luv_to_xyz(Luv(0.0, 3.0, 4.0)) == XYZ(0.0, 0.0, 0.0)

    def test_luv_black(self):
        assert cie.xyz_to_luv(XYZ(0.0, 0.0, 0.0)) == Luv(0.0, 0.0, 0.0)

    def test_xyy_zero_sum(self):
        assert cie.xyz_to_xyy(XYZ(0.0, 0.0, 0.0)) == xyY(0.0, 0.0, 0.0)

    def test_xyy_zero_y_is_black(self):
        assert cie.xyy_to_xyz(xyY(0.3, 0.0, 0.5)) == XYZ(0.0, 0.0, 0.0)

    def test_xyy_round_trip(self):
        value = XYZ(0.3, 0.4, 0.2)
        xyy = cie.xyz_to_xyy(value)
        assert xyy.x + xyy.y == pytest.approx(0.7 / 0.9)
        assert cie.xyy_to_xyz(xyy).components() == pytest.approx(value.components(), rel=1e-12)

    def test_lch_hue(self):
        lch = cie.lab_to_lchab(Lab(50.0, 0.0, -10.0))
        assert lch.c == pytest.approx(10.0)
        assert lch.h == pytest.approx(1.5 * math.pi)

    def test_lch_hue_never_reaches_tau(self):
        lch = cie.lab_to_lchab(Lab(50.0, 1.0, -1e-300))
        assert 0.0 <= lch.h < 2.0 * math.pi

    def test_lch_round_trip(self):
        value = Lab(60.0, -20.0, 35.0)
        restored = cie.lchab_to_lab(cie.lab_to_lchab(value))
        assert restored.components() == pytest.approx(value.components(), rel=1e-12)

    def test_lshuv(self):
        lsh = cie.lchuv_to_lshuv(LCHuv(50.0, 25.0, 1.0))
        assert lsh.s == pytest.approx(0.5)
        assert cie.lshuv_to_lchuv(lsh) == LCHuv(50.0, 25.0, 1.0)

    def test_lshuv_zero_lightness(self):
        assert cie.lchuv_to_lshuv(LCHuv(0.0, 5.0, 1.0)).s == 0.0

    def test_polar_of_gray(self):
        assert cie.lab_to_lchab(Lab(40.0, 0.0, 0.0)) == LCHab(40.0, 0.0, 0.0)
