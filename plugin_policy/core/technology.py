# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Technology tags used to scope which checks apply to a target.

Techs form a tree (``Db.MySQL`` is a child of ``Db``).  Including a parent
includes all of its children unless a child is excluded explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Tech:
    """A technology tag, optionally nested under a parent tag."""

    name: str
    parent: Tech | None = None

    @property
    def qualified_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.qualified_name}.{self.name}"

    def ancestors(self) -> list[Tech]:
        """Return this tech followed by its parents, nearest first."""
        chain: list[Tech] = []
        node: Tech | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain

    def is_child_of(self, other: Tech) -> bool:
        return other in self.ancestors()[1:]

    def __str__(self) -> str:
        return self.qualified_name


# ---------------------------------------------------------------------------
# Built-in catalogue
# ---------------------------------------------------------------------------

DB = Tech("Db")
DB_MYSQL = Tech("MySQL", DB)
DB_POSTGRESQL = Tech("PostgreSQL", DB)
DB_MSSQL = Tech("Microsoft SQL Server", DB)
DB_ORACLE = Tech("Oracle", DB)
DB_SQLITE = Tech("SQLite", DB)
DB_MONGODB = Tech("MongoDB", DB)

LANG = Tech("Language")
LANG_ASP = Tech("ASP", LANG)
LANG_JAVA = Tech("Java", LANG)
LANG_JAVASCRIPT = Tech("JavaScript", LANG)
LANG_PHP = Tech("PHP", LANG)
LANG_PYTHON = Tech("Python", LANG)
LANG_RUBY = Tech("Ruby", LANG)

OS = Tech("OS")
OS_LINUX = Tech("Linux", OS)
OS_MACOS = Tech("MacOS", OS)
OS_WINDOWS = Tech("Windows", OS)

SCM = Tech("SCM")
SCM_GIT = Tech("Git", SCM)
SCM_SVN = Tech("SVN", SCM)

WS = Tech("WS")
WS_APACHE = Tech("Apache", WS)
WS_IIS = Tech("IIS", WS)
WS_NGINX = Tech("Nginx", WS)
WS_TOMCAT = Tech("Tomcat", WS)

TOP_LEVEL_TECHS: tuple[Tech, ...] = (DB, LANG, OS, SCM, WS)

ALL_TECHS: tuple[Tech, ...] = (
    DB,
    DB_MYSQL,
    DB_POSTGRESQL,
    DB_MSSQL,
    DB_ORACLE,
    DB_SQLITE,
    DB_MONGODB,
    LANG,
    LANG_ASP,
    LANG_JAVA,
    LANG_JAVASCRIPT,
    LANG_PHP,
    LANG_PYTHON,
    LANG_RUBY,
    OS,
    OS_LINUX,
    OS_MACOS,
    OS_WINDOWS,
    SCM,
    SCM_GIT,
    SCM_SVN,
    WS,
    WS_APACHE,
    WS_IIS,
    WS_NGINX,
    WS_TOMCAT,
)

_BY_QUALIFIED_NAME = {t.qualified_name.lower(): t for t in ALL_TECHS}


def get_tech(qualified_name: str) -> Tech:
    """Look up a built-in tech by qualified name (case-insensitive).

    Raises:
        ValueError: If no built-in tech has that name.
    """
    try:
        return _BY_QUALIFIED_NAME[qualified_name.lower()]
    except KeyError:
        raise ValueError(f"Unknown tech '{qualified_name}'") from None


class TechSet:
    """A set of included and excluded techs."""

    def __init__(self, include: Iterable[Tech] = (), exclude: Iterable[Tech] = ()) -> None:
        self._include: set[Tech] = set(include)
        self._exclude: set[Tech] = set(exclude)

    @classmethod
    def all(cls) -> TechSet:
        """A set covering every built-in tech."""
        return cls(include=TOP_LEVEL_TECHS)

    def include(self, tech: Tech) -> None:
        self._include.add(tech)
        self._exclude.discard(tech)

    def exclude(self, tech: Tech) -> None:
        self._exclude.add(tech)
        self._include.discard(tech)

    def includes(self, tech: Tech) -> bool:
        """True if *tech* (or an ancestor) is included and neither it nor an ancestor is excluded."""
        chain = tech.ancestors()
        if any(t in self._exclude for t in chain):
            return False
        return any(t in self._include for t in chain)

    def included_techs(self) -> frozenset[Tech]:
        return frozenset(self._include)

    def excluded_techs(self) -> frozenset[Tech]:
        return frozenset(self._exclude)

    def copy(self) -> TechSet:
        return TechSet(self._include, self._exclude)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TechSet):
            return NotImplemented
        return self._include == other._include and self._exclude == other._exclude

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inc = sorted(t.qualified_name for t in self._include)
        exc = sorted(t.qualified_name for t in self._exclude)
        return f"TechSet(include={inc}, exclude={exc})"
