import pickle

import pytest

from omsvc.constants import SVTYPE
from omsvc.error import InvalidVariantError
from omsvc.variant import StructuralVariant, deduplicate, effective_type


def variant(chrom1, pos1, chrom2, pos2, svtype=SVTYPE.DEL, **kwargs):
    kwargs.setdefault('source', 'test')
    return StructuralVariant(
        chrom1=chrom1, pos1=pos1, chrom2=chrom2, pos2=pos2, primary_type=svtype, **kwargs
    )


class TestStructuralVariant:
    def test_normalizes_chromosomes(self):
        sv = variant('chr1', 100, 'Chr1', 200)
        assert sv.chrom1 == '1'
        assert sv.chrom2 == '1'
        sv = variant('chrMT', 1, 'MT', 5)
        assert sv.chrom1 == 'M'

    def test_orders_positions(self):
        sv = variant('1', 2000, '1', 1000)
        assert sv.pos1 == 1000
        assert sv.pos2 == 2000
        assert sv.length == 1000

    def test_orders_interchromosomal_ends(self):
        sv = variant('12', 8001, '5', 5000, SVTYPE.BND)
        assert (sv.chrom1, sv.pos1, sv.chrom2, sv.pos2) == ('5', 5000, '12', 8001)
        assert sv.interchromosomal
        assert sv.length is None
        assert sv.span is None

    def test_sex_chromosomes_after_autosomes(self):
        sv = variant('X', 10, '2', 20, SVTYPE.BND)
        assert sv.chrom1 == '2'
        assert sv.chrom2 == 'X'

    def test_point_event(self):
        sv = StructuralVariant('test', '2', 50000, primary_type=SVTYPE.INS)
        assert sv.point_event
        assert sv.length == 0
        assert sv.pos2 == 50000

    def test_negative_position_error(self):
        with pytest.raises(InvalidVariantError):
            variant('1', -1, '1', 100)

    def test_missing_type_error(self):
        with pytest.raises(InvalidVariantError):
            variant('1', 1, '1', 100, None)

    def test_bad_type_error(self):
        with pytest.raises(KeyError):
            variant('1', 1, '1', 100, 'TRANSLOCATION')

    def test_immutable(self):
        sv = variant('1', 1, '1', 100)
        with pytest.raises(AttributeError):
            sv.pos1 = 5
        with pytest.raises(TypeError):
            sv.data['thing'] = 1

    def test_pickle(self):
        sv = variant('1', 1, '1', 100, genes=['A'], id='x', data={'Zygosity': 'homozygous'})
        copy = pickle.loads(pickle.dumps(sv))
        assert copy == sv
        assert copy.data['Zygosity'] == 'homozygous'

    def test_flatten(self):
        sv = variant('1', 1, '1', 100, genes=['B', 'A'], id='x')
        row = sv.flatten('base_')
        assert row == {
            'base_id': 'x',
            'base_chrom1': '1',
            'base_pos1': 1,
            'base_chrom2': '1',
            'base_pos2': 100,
            'base_type': 'DEL',
            'base_length': 99,
            'base_genes': 'A;B',
        }

    def test_flatten_alternate_type(self):
        sv = variant('1', 1, '1', 100, SVTYPE.BND, alternate_type=SVTYPE.INV)
        row = sv.flatten()
        assert row['type'] == 'BND/INV'
        assert row['genes'] is None


class TestEffectiveType:
    def test_breakend_alternate(self):
        sv = variant('1', 5000, '2', 8000, SVTYPE.BND, alternate_type=SVTYPE.INV)
        assert effective_type(sv, prefer_base_type=False) == SVTYPE.INV
        assert effective_type(sv, prefer_base_type=True) == SVTYPE.BND

    def test_breakend_without_alternate(self):
        sv = variant('1', 5000, '2', 8000, SVTYPE.BND)
        assert effective_type(sv) == SVTYPE.BND

    def test_alternate_ignored_for_other_types(self):
        sv = variant('1', 5000, '1', 8000, SVTYPE.DEL, alternate_type=SVTYPE.INV)
        assert effective_type(sv) == SVTYPE.DEL


class TestDeduplicate:
    def test_keeps_first(self):
        first = variant('1', 100, '1', 200, id='a', genes=['A'])
        second = variant('1', 100, '1', 200, id='b')
        other = variant('1', 100, '1', 300, id='c')
        result = deduplicate([first, second, other])
        assert [v.id for v in result] == ['a', 'c']

    def test_idempotent(self):
        variants = [
            variant('1', 100, '1', 200, id='a'),
            variant('1', 200, '1', 100, id='b'),
            variant('2', 100, '2', 200, id='c'),
            variant('2', 100, '2', 200, SVTYPE.DUP, id='d'),
        ]
        once = deduplicate(variants)
        assert deduplicate(once) == once
        assert [v.id for v in once] == ['a', 'c', 'd']

    def test_effective_type(self):
        variants = [
            variant('1', 100, '2', 200, SVTYPE.BND, alternate_type=SVTYPE.INV, id='a'),
            variant('1', 100, '2', 200, SVTYPE.BND, id='b'),
        ]
        assert len(deduplicate(variants, prefer_base_type=False)) == 2
        assert len(deduplicate(variants, prefer_base_type=True)) == 1

    def test_sources_are_distinct(self):
        variants = [
            variant('1', 100, '1', 200, source='a'),
            variant('1', 100, '1', 200, source='b'),
        ]
        assert len(deduplicate(variants)) == 2
