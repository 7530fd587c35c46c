# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""relnamer - Release name and tag inference for private tracker uploads."""

from relnamer.__about__ import __version__

__all__ = ["__version__"]
