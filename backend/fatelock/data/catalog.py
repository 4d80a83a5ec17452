"""Static unlock catalog: every item a player can earn, per content table."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List


class CatalogError(ValueError):
    """Raised when the bundled catalog is inconsistent."""


class DropSource(str, Enum):
    QUEST_NOVICE = "Quest (Novice)"
    QUEST_INTERMEDIATE = "Quest (Intermediate)"
    QUEST_EXPERIENCED = "Quest (Experienced)"
    QUEST_MASTER = "Quest (Master)"
    QUEST_GRANDMASTER = "Quest (Grandmaster)"
    CA_EASY = "Combat Achievement (Easy)"
    CA_MEDIUM = "Combat Achievement (Medium)"
    CA_HARD = "Combat Achievement (Hard)"
    CA_ELITE = "Combat Achievement (Elite)"
    CA_MASTER = "Combat Achievement (Master)"
    CA_GRANDMASTER = "Combat Achievement (Grandmaster)"
    LEVEL_UP = "Level Up"
    COLLECTION_LOG = "Collection Log"
    DIARY_EASY = "Diary (Easy)"
    DIARY_MEDIUM = "Diary (Medium)"
    DIARY_HARD = "Diary (Hard)"
    DIARY_ELITE = "Diary (Elite)"
    SLAYER_TASK = "Slayer Task"
    CLUE_BEGINNER = "Clue Scroll (Beginner)"
    CLUE_EASY = "Clue Scroll (Easy)"
    CLUE_MEDIUM = "Clue Scroll (Medium)"
    CLUE_HARD = "Clue Scroll (Hard)"
    CLUE_ELITE = "Clue Scroll (Elite)"
    CLUE_MASTER = "Clue Scroll (Master)"


SKILLS_LIST: List[str] = [
    "Attack", "Hitpoints", "Mining",
    "Strength", "Agility", "Smithing",
    "Defence", "Herblore", "Fishing",
    "Ranged", "Thieving", "Cooking",
    "Prayer", "Crafting", "Firemaking",
    "Magic", "Fletching", "Woodcutting",
    "Runecraft", "Slayer", "Farming",
    "Construction", "Hunter", "Sailing",
]

SKILL_TIER_MAX = 10

# Always unlocked: tier 1, level 10 on a fresh save.
BASELINE_SKILL = "Hitpoints"
BASELINE_SKILL_TIER = 1
BASELINE_SKILL_LEVEL = 10

EQUIPMENT_SLOTS: List[str] = [
    "Head", "Cape", "Neck", "Ammo", "Weapon", "Body",
    "Shield", "Legs", "Gloves", "Boots", "Ring",
]

EQUIPMENT_TIER_MAX = 9

MOBILITY_LIST: List[str] = [
    "Spirit Trees",
    "Fairy Rings",
    "Gnome Gliders",
    "Charter Ships",
    "Teleport Tablets",
    "Jewelry Teleports",
]

POWER_LIST: List[str] = [
    "Ancient Magicks",
    "Lunar Spellbook",
    "Arceuus Spellbook",
    "Protection Prayers",
    "High Alchemy",
]

BOSSES_LIST: List[str] = [
    "Wintertodt",
    "Tempoross",
    "TzHaar Fight Cave",
    "Inferno",
    "TzHaar-Ket-Rak's Challenges",
    "The Gauntlet",
    "Fortis Colosseum",
]

MINIGAMES_LIST: List[str] = [
    "Shooting Stars",
    # Combat
    "Barbarian Assault",
    "Bounty Hunter",
    "Castle Wars",
    "Clan Wars",
    "Emir's Arena",
    "Intelligence Gathering",
    "Last Man Standing",
    "Mage Arena",
    "Nightmare Zone",
    "Pest Control",
    "Soul Wars",
    "Temple Trekking",
    "TzHaar Fight Pit",
    # Skilling
    "Archery Competition",
    "Blast Furnace",
    "Brimhaven Agility Arena",
    "Fishing Trawler",
    "Giants' Foundry",
    "Gnome Ball",
    "Gnome Restaurant",
    "Guardians of the Rift",
    "Hallowed Sepulchre",
    "Impetuous Impulses",
    "Mage Training Arena",
    "Mahogany Homes",
    "Mastering Mixology",
    "Mess",
    "Pyramid Plunder",
    "Rogues' Den",
    "Sorceress's Garden",
    "Stealing Artefacts",
    "Tithe Farm",
    "Trouble Brewing",
    "Vale Totems",
    "Volcanic Mine",
    # Hybrid
    "Shades of Mort'ton",
    "Tai Bwo Wannai Cleanup",
    "Warriors' Guild",
    # Misc
    "Burthorpe Games Room",
    "Forestry",
    "Rat Pits",
    "Tears of Guthix",
]

# Starting areas, open from the first login and never part of the regions pool.
MISTHALIN_AREAS: List[str] = [
    "Varrock", "Lumbridge", "Draynor Village", "Wizards' Tower", "Edgeville",
    "Barbarian Village", "Digsite", "Silvarea", "Paterdomus",
]

REGION_GROUPS: Dict[str, List[str]] = {
    "Asgarnia": [
        "Falador", "Port Sarim", "Rimmington", "Taverley", "Burthorpe", "Warriors' Guild",
        "Heroes' Guild", "Crafting Guild", "Dwarven Mine", "Ice Mountain",
        "Asgarnian Ice Dungeon", "Motherlode Mine", "Goblin Village", "Mudskipper Point",
        "Void Knights' Outpost", "Entrana",
    ],
    "Kandarin": [
        "East Ardougne", "West Ardougne", "Catherby", "Seers' Village", "Camelot", "Yanille",
        "Port Khazard", "Hemenster", "Fishing Guild", "Ranging Guild", "Legends' Guild",
        "Tree Gnome Stronghold", "Gnome Village", "Witchaven", "Piscatoris Fishing Colony",
        "Feldip Hills", "Baxtorian Falls", "Otto's Grotto", "Barbarian Outpost", "Fight Arena",
    ],
    "Karamja": [
        "Musa Point", "Brimhaven", "Tai Bwo Wannai", "Shilo Village", "Kharazi Jungle",
        "Mor Ul Rek (TzHaar City)", "Crandor",
    ],
    "Kharidian Desert": [
        "Al Kharid", "Duel Arena / PvP Arena", "Shantay Pass", "Pollnivneach", "Nardah",
        "Sophanem", "Menaphos", "Bandit Camp", "Bedabin Camp", "Ruins of Uzer",
        "Mage Training Arena", "Agility Pyramid", "Giants' Plateau", "Kalphite Lair",
    ],
    "Morytania": [
        "Canifis", "Port Phasmatys", "Mort'ton", "Barrows", "Burgh de Rott", "Meiyerditch",
        "Darkmeyer", "Slepe", "Ver Sinhaza", "Fenkenstrain's Castle", "Slayer Tower",
        "Mort Myre Swamp", "Haunted Mine", "Haunted Woods", "Harmony Island",
        "Mos Le'Harmless", "Braindeath Island", "Dragontooth Island",
    ],
    "Fremennik": [
        "Rellekka", "Neitiznot", "Jatizso", "Miscellania & Etceteria", "Waterbirth Island",
        "Lunar Isle", "Mountain Camp", "Lighthouse", "Keldagrim",
    ],
    "Tirannwn": [
        "Prifddinas", "Lletya", "Tyras Camp", "Elf Camp", "Isafdar", "Zul-Andra",
        "Arandar", "Gwenith", "Iorwerth Camp",
    ],
    "Wilderness": [
        "Ferox Enclave", "Wilderness Volcano", "Chaos Temple", "Rogues' Castle", "Lava Maze",
        "Bandit Camp", "Dark Warriors' Fortress", "Graveyard of Shadows", "Forgotten Cemetery",
        "Resource Area", "Mage Arena", "Scorpia's Cave", "Fountain of Rune",
        "Wilderness God Wars Dungeon",
    ],
    "Kourend & Kebos": [
        "Kourend Castle", "Hosidius", "Piscarilius", "Shayzien", "Lovakengj", "Arceuus",
        "Kebos Lowlands", "Molch", "Farming Guild", "Woodcutting Guild", "Mount Quidamortem",
        "Mount Karuulm", "Catacombs of Kourend", "Land's End", "Wintertodt Camp",
    ],
    "Varlamore": [
        "Civitas illa Fortis", "Avium Savannah", "Cam Torum", "Ralos' Rise", "Darkfrost",
        "Hunter's Guild", "Aldarin", "The Stranglewood",
    ],
    "Islands & Others": [
        "Fossil Island", "Ape Atoll", "Zanaris", "Tutorial Island",
    ],
    "The Open Seas": [
        "Pandemonium", "The Great Conch", "The Little Pearl", "Drumstick Isle", "Ledger Island",
        "Brittle Island", "Vatricos Island", "Laguna Auror", "Chin Champa Island",
        "Doggos Island", "Splinter Island", "Chard Island", "Grimstone", "Isle of Bones",
        "Minotaur's Rest", "The Pincers", "Barracuda Trials", "Crabclaw Isle",
        "Isle of Souls (Expanded)",
    ],
}

# "Bandit Camp" sits in two groups; the pool keeps the first occurrence only.
REGIONS_LIST: List[str] = list(
    dict.fromkeys(area for areas in REGION_GROUPS.values() for area in areas)
)

DROP_RATES: Dict[DropSource, int] = {
    DropSource.QUEST_NOVICE: 20,
    DropSource.QUEST_INTERMEDIATE: 40,
    DropSource.QUEST_EXPERIENCED: 60,
    DropSource.QUEST_MASTER: 80,
    DropSource.QUEST_GRANDMASTER: 100,
    DropSource.CA_EASY: 5,
    DropSource.CA_MEDIUM: 10,
    DropSource.CA_HARD: 20,
    DropSource.CA_ELITE: 50,
    DropSource.CA_MASTER: 50,
    DropSource.CA_GRANDMASTER: 50,
    DropSource.COLLECTION_LOG: 5,
    DropSource.DIARY_EASY: 25,
    DropSource.DIARY_MEDIUM: 50,
    DropSource.DIARY_HARD: 75,
    DropSource.DIARY_ELITE: 100,
    DropSource.SLAYER_TASK: 10,
    DropSource.CLUE_BEGINNER: 15,
    DropSource.CLUE_EASY: 30,
    DropSource.CLUE_MEDIUM: 45,
    DropSource.CLUE_HARD: 60,
    DropSource.CLUE_ELITE: 75,
    DropSource.CLUE_MASTER: 90,
}

# --- Display assets (file names relative to the wiki image root) ---

REGION_ICONS: Dict[str, str] = {
    "Misthalin": "Varrock_teleport.png",
    "Asgarnia": "Falador_teleport.png",
    "Kandarin": "Camelot_teleport.png",
    "Karamja": "Karamja_gloves_1.png",
    "Kharidian Desert": "Desert_amulet_1.png",
    "Morytania": "Ectophial.png",
    "Fremennik": "Fremennik_sea_boots_1.png",
    "Tirannwn": "Crystal_teleport_seed.png",
    "Wilderness": "Wilderness_sword_1.png",
    "Kourend & Kebos": "Xeric's_talisman.png",
    "Varlamore": "Civitas_illa_Fortis_teleport.png",
    "Islands & Others": "Fossil_Island_Teleport.png",
    "The Open Seas": "Sailing_icon.png",
}

SLOT_ICONS: Dict[str, str] = {
    "Head": "Head_slot.png",
    "Cape": "Cape_slot.png",
    "Neck": "Neck_slot.png",
    "Ammo": "Ammo_slot.png",
    "Weapon": "Weapon_slot.png",
    "Body": "Body_slot.png",
    "Shield": "Shield_slot.png",
    "Legs": "Legs_slot.png",
    "Gloves": "Hands_slot.png",
    "Boots": "Feet_slot.png",
    "Ring": "Ring_slot.png",
}

SPECIAL_ICONS: Dict[str, str] = {
    # Mobility
    "Spirit Trees": "Spirit_tree_map_icon.png",
    "Fairy Rings": "Fairy_ring_map_icon.png",
    "Gnome Gliders": "Gnome_glider_map_icon.png",
    "Charter Ships": "Charter_Crew_member_icon.png",
    "Teleport Tablets": "Teleport_to_house.png",
    "Jewelry Teleports": "Games_necklace(8).png",
    # Power
    "Ancient Magicks": "Ancient_Magicks_icon.png",
    "Lunar Spellbook": "Lunar_spells_icon.png",
    "Arceuus Spellbook": "Arceuus_spells_icon.png",
    "Protection Prayers": "Protect_from_Melee_icon.png",
    "High Alchemy": "High_Level_Alchemy_icon.png",
    # Minigames & bosses
    "Wintertodt": "Wintertodt_icon.png",
    "Tempoross": "Tempoross_icon.png",
    "Shooting Stars": "Celestial_ring.png",
    "Barbarian Assault": "Fighter_torso.png",
    "Bounty Hunter": "Bounty_hunter_emblem_tier_1.png",
    "Castle Wars": "Saradomin_standard.png",
    "Clan Wars": "Clan_Wars_cape_(purple).png",
    "Emir's Arena": "Duel_Arena_teleport.png",
    "Fortis Colosseum": "Dizana's_quiver.png",
    "Inferno": "Infernal_cape.png",
    "Last Man Standing": "Victor's_cape_(1000).png",
    "Mage Arena": "God_cape.png",
    "Nightmare Zone": "Black_mask_(i).png",
    "Pest Control": "Void_knight_helm.png",
    "Soul Wars": "Soul_wars_portal.png",
    "Temple Trekking": "Gadderhammer.png",
    "TzHaar Fight Cave": "Fire_cape.png",
    "TzHaar Fight Pit": "Toktz-ket-xil.png",
    "TzHaar-Ket-Rak's Challenges": "Tokkul.png",
    "Archery Competition": "Bronze_arrow.png",
    "Blast Furnace": "Blast_furnace_icon.png",
    "Brimhaven Agility Arena": "Agility_arena_ticket.png",
    "Fishing Trawler": "Angler_hat.png",
    "Giants' Foundry": "Kovac.png",
    "Gnome Ball": "Gnomeball.png",
    "Gnome Restaurant": "Mint_cocktail.png",
    "Guardians of the Rift": "Abyssal_pearl.png",
    "Hallowed Sepulchre": "Hallowed_ring.png",
    "Impetuous Impulses": "Eclectic_impling_jar.png",
    "Mage Training Arena": "Teacher_wand.png",
    "Mahogany Homes": "Carpenter's_helmet.png",
    "Mastering Mixology": "Mojo_icon.png",
    "Mess": "Fried_mushrooms.png",
    "Pyramid Plunder": "Pharaoh's_sceptre.png",
    "Rogues' Den": "Rogue_kit.png",
    "Sorceress's Garden": "Summer_sq'irkjuice.png",
    "Stealing Artefacts": "Golden_goblet.png",
    "Tithe Farm": "Farmer_Gricoller's_can.png",
    "Trouble Brewing": "Rum_(blue).png",
    "Volcanic Mine": "Volcanic_Mine_teleport.png",
    "Shades of Mort'ton": "Flamtaer_hammer.png",
    "Tai Bwo Wannai Cleanup": "Trading_sticks.png",
    "The Gauntlet": "Crystal_helm.png",
    "Warriors' Guild": "Dragon_defender.png",
    "Burthorpe Games Room": "RuneLink_table.png",
    "Forestry": "Forestry_kit.png",
    "Rat Pits": "Rat_pole.png",
    "Tears of Guthix": "Tears_of_Guthix.png",
}

WIKI_OVERRIDES: Dict[str, str] = {
    "Duel Arena / PvP Arena": "PvP_Arena",
    "Miscellania & Etceteria": "Miscellania",
    "Isle of Souls (Expanded)": "Isle_of_Souls",
    "Mort'ton": "Mort'ton",
    "Shades of Mort'ton": "Shades_of_Mort'ton",
    "Civitas illa Fortis": "Civitas_illa_Fortis",
    "Hunter's Guild": "Hunter_Guild",
    "Mor Ul Rek (TzHaar City)": "Mor_Ul_Rek",
}


def parent_region(area: str) -> str | None:
    """Return the region group that lists ``area`` first, if any."""

    for group, areas in REGION_GROUPS.items():
        if area in areas:
            return group
    return None


def _duplicates(items: List[str]) -> List[str]:
    seen: set[str] = set()
    dupes: List[str] = []
    for item in items:
        if item in seen and item not in dupes:
            dupes.append(item)
        seen.add(item)
    return dupes


def validate_catalog() -> None:
    """Check the bundled catalog for completeness.

    Raises :class:`CatalogError` describing every problem found.
    """

    problems: List[str] = []
    pools = {
        "skills": SKILLS_LIST,
        "equipment": EQUIPMENT_SLOTS,
        "regions": REGIONS_LIST,
        "mobility": MOBILITY_LIST,
        "power": POWER_LIST,
        "minigames": MINIGAMES_LIST,
        "bosses": BOSSES_LIST,
    }
    for name, pool in pools.items():
        if not pool:
            problems.append(f"{name} catalog is empty")
        dupes = _duplicates(pool)
        if dupes:
            problems.append(f"{name} catalog has duplicates: {', '.join(dupes)}")

    overlap = sorted(set(BOSSES_LIST) & set(MINIGAMES_LIST))
    if overlap:
        problems.append(f"bosses and minigames overlap: {', '.join(overlap)}")

    if BASELINE_SKILL not in SKILLS_LIST:
        problems.append(f"baseline skill {BASELINE_SKILL!r} is not a known skill")

    for source in DropSource:
        rate = DROP_RATES.get(source)
        if source is DropSource.LEVEL_UP:
            # Level-up rolls use the new level as their threshold.
            continue
        if rate is None:
            problems.append(f"no drop rate for {source.value}")
        elif not 0 <= rate <= 100:
            problems.append(f"drop rate for {source.value} out of range: {rate}")

    missing_slots = [slot for slot in EQUIPMENT_SLOTS if slot not in SLOT_ICONS]
    if missing_slots:
        problems.append(f"equipment slots without icons: {', '.join(missing_slots)}")

    if problems:
        raise CatalogError("; ".join(problems))
