from enum import Enum


class CharacterClass(Enum):
    AMAZON      = 0
    SORCERESS   = 1
    NECROMANCER = 2
    PALADIN     = 3
    BARBARIAN   = 4
    DRUID       = 5
    ASSASSIN    = 6

    @property
    def label(self):
        return self.name.title()


class AttributeKind(Enum):
    '''The value is the 9-bit tag that precedes the attribute in the file.'''
    STRENGTH    = 0
    ENERGY      = 1
    DEXTERITY   = 2
    VITALITY    = 3
    NEW_POINTS  = 4  # stat points not yet spent
    NEW_SKILLS  = 5  # skill points not yet spent
    HIT_POINTS  = 6
    MAX_HEALTH  = 7
    MANA        = 8
    MAX_MANA    = 9
    STAMINA     = 10
    MAX_STAMINA = 11
    LEVEL       = 12
    EXPERIENCE  = 13
    GOLD        = 14
    GOLD_STASH  = 15

    @property
    def label(self):
        return self.name.title().replace('_', '')
