"""Tests for :mod:`loginserver.process.blueprint`."""

from unittest import TestCase

from loginserver.process import blueprint


class TestGenerate(TestCase):
    """:func:`.blueprint.generate` builds the document of a new character."""

    def test_male(self) -> None:
        """Male characters get the male outfits."""
        document = blueprint.generate('bob', 'male')
        self.assertEqual(document['creatureStatistics']['name'], 'Bob')
        self.assertEqual(document['creatureStatistics']['outfit']['id'], 128)
        self.assertEqual(document['characterStatistics']['sex'], 0)
        self.assertEqual(document['characterStatistics']['availableOutfits'],
                         [128, 129, 130, 131])

    def test_female(self) -> None:
        """Female characters get the female outfits."""
        document = blueprint.generate('alice', 'female')
        self.assertEqual(document['creatureStatistics']['name'], 'Alice')
        self.assertEqual(document['creatureStatistics']['outfit']['id'], 136)
        self.assertEqual(document['characterStatistics']['sex'], 1)
        self.assertEqual(document['characterStatistics']['availableOutfits'],
                         [136, 137, 138, 139])

    def test_unknown_sex(self) -> None:
        """Any other sex is rejected."""
        with self.assertRaises(ValueError):
            blueprint.generate('bob', 'other')

    def test_template_is_not_shared(self) -> None:
        """Changing one generated document does not affect the next one."""
        first = blueprint.generate('bob', 'male')
        first['creatureStatistics']['outfit']['id'] = 999
        first['characterStatistics']['availableOutfits'].append(999)
        second = blueprint.generate('bob', 'male')
        self.assertEqual(second['creatureStatistics']['outfit']['id'], 128)
        self.assertNotIn(999,
                         second['characterStatistics']['availableOutfits'])
