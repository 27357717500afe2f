"""Shared fixtures: in-memory schemas and on-disk Noesis projects."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

CARD_XML = """\
<?xml version="1.0" encoding="utf-8"?>
<Class Name="Card">
  <Property Name="Title" Type="String" StringMinWordCount="1" StringMaxWordCount="3"/>
  <Property Name="Power" Type="Number" NumberMinValue="0" NumberMaxValue="10" NumberDecimalCount="0"/>
  <Property Name="Foil" Type="Boolean"/>
  <Property Name="Rarity" Type="Enum" SubType="Deck.Rarity"/>
  <Property Name="Art" Type="Object" SubType="ImageSource" ImageSourcePath="images"/>
  <Property Name="Tint" Type="Object" SubType="Brush"/>
  <Property Name="Font" Type="Object" SubType="FontFamily"/>
  <Property Name="Stats" Type="Object" SubType="Stats"/>
  <Property Name="Tags" Type="Collection" SubType="String"/>
  <Property Name="Play" Type="Command"/>
</Class>
"""

STATS_XML = """\
<Class Name="Stats">
  <Property Name="Attack" Type="Number"/>
</Class>
"""

RARITY_XML = """\
<Enum Name="Rarity">
  <Item Name="Common" Value="0"/>
  <Item Name="Rare" Value="1"/>
  <Item Name="Legendary" Value="2"/>
</Enum>
"""

DECK_XML = """\
<Class Name="Deck">
  <Property Name="Name" Type="String"/>
  <Property Name="Cards" Type="Collection" SubType="Card"/>
  <Property Name="Colors" Type="Collection" SubType="Brush"/>
</Class>
"""

STARTER_XAML = """\
<Deck xmlns="http://schemas.microsoft.com/winfx/2006/xaml/presentation"
      xmlns:x="http://schemas.microsoft.com/winfx/2006/xaml"
      xmlns:sys="clr-namespace:System;assembly=mscorlib"
      Name="Starter">
  <Deck.Cards>
    <Card Title="Ace" Power="3" Foil="True" Rarity="Rare"
          Art="pack://application:,,,/Game;component/images/ace.png"
          Tint="#FFAA0000" Font="Oswald">
      <Card.Stats>
        <Stats Attack="5"/>
      </Card.Stats>
      <Card.Tags>
        <sys:String>fast</sys:String>
        <sys:String>"quoted"</sys:String>
      </Card.Tags>
      <Card.Play>
        <MessageCommand Message="Ace played"/>
      </Card.Play>
    </Card>
    <Card Title="Blank"/>
  </Deck.Cards>
  <Deck.Colors>
    <SolidColorBrush Color="#FF112233"/>
  </Deck.Colors>
</Deck>
"""


@pytest.fixture(autouse=True)
def _reset_logging_and_config():
    """Undo CLI logging setup and config caching between tests."""
    from noesisgen.config import get_config
    from noesisgen.utils.logging import shutdown_logging

    get_config.cache_clear()
    yield
    shutdown_logging()
    get_config.cache_clear()


@pytest.fixture()
def build_registry() -> Callable[..., Any]:
    """Return a helper that loads a registry from structure XML strings."""
    from noesisgen.schema.loader import SchemaSource, load_schema
    from noesisgen.xmltree import parse_xml

    def _build(*xml_texts: str):
        sources = []
        for index, text in enumerate(xml_texts):
            root_tag, node = parse_xml(text)
            sources.append(SchemaSource(name=f"source{index}.xml", root_tag=root_tag, node=node))
        return load_schema(sources)

    return _build


@pytest.fixture()
def card_registry(build_registry):
    return build_registry(CARD_XML, STATS_XML, RARITY_XML, DECK_XML)


@pytest.fixture()
def noesis_project(tmp_path: Path) -> Path:
    """A project root with ``.noesis/data/{structures,sets}`` populated."""
    project = tmp_path / "project"
    structures = project / ".noesis" / "data" / "structures"
    sets = project / ".noesis" / "data" / "sets"
    structures.mkdir(parents=True)
    sets.mkdir(parents=True)

    (structures / "Card.xml").write_text(CARD_XML, encoding="utf-8")
    (structures / "Stats.xml").write_text(STATS_XML, encoding="utf-8")
    (structures / "Rarity.xml").write_text(RARITY_XML, encoding="utf-8")
    (structures / "Deck.xml").write_text(DECK_XML, encoding="utf-8")
    (structures / "notes.txt").write_text("not a structure", encoding="utf-8")

    (sets / "Starter.xaml").write_text(STARTER_XAML, encoding="utf-8")
    return project


@pytest.fixture()
def starter_tree():
    """``(root_tag, node)`` for the Starter deck data set."""
    from noesisgen.xmltree import parse_xml

    return parse_xml(STARTER_XAML)
