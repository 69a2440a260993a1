import pytest

from omsvc.constants import SVTYPE
from omsvc.convert.vcf import (
    VcfRecordType,
    convert_file,
    convert_record,
    pandas_vcf,
    parse_bnd_alt,
    parse_info,
)

from ...util import get_data


def test_read_vcf():
    header, df = pandas_vcf(get_data('longranger.vcf'))
    assert len(header) == 5
    assert df.shape[0] == 3
    assert list(df['CHROM']) == ['chr1', 'chr5', 'chrX']


def test_convert_file():
    records = convert_file(get_data('sniffles.vcf'))
    assert len(records) == 3
    assert records[0].id == 'sn1'
    assert records[0].pos == 10010
    assert records[0].stop == 11005
    assert records[0].alts == ['<DEL>']


class TestParseBndAlt:
    def test_right(self):
        assert parse_bnd_alt('N]chr12:8001]') == ('chr12', 8001, 'N', '')
        assert parse_bnd_alt('GTT[chr1:500[') == ('chr1', 500, 'G', 'TT')

    def test_left(self):
        assert parse_bnd_alt(']chrUn_GL000216v2:142821]N') == ('chrUn_GL000216v2', 142821, 'N', '')
        assert parse_bnd_alt('[7:100[AAG') == ('7', 100, 'G', 'AA')

    def test_bad_format(self):
        with pytest.raises(NotImplementedError):
            parse_bnd_alt('<DEL>')


def test_parse_info():
    info = parse_info('SVTYPE=DEL;END=2000;PRECISE;CIPOS=-10,10')
    assert info == {'SVTYPE': 'DEL', 'END': 2000, 'PRECISE': True, 'CIPOS': (-10, 10)}
    assert parse_info(None) == {}


class TestConvertRecord:
    def test_deletion(self):
        record = VcfRecordType(
            id='d1', pos=1000, chrom='chr1', alts=['<DEL>'], ref='N', info=parse_info('SVTYPE=DEL;END=2000')
        )
        rows = convert_record(record)
        assert len(rows) == 1
        assert rows[0]['chrom1'] == 'chr1'
        assert rows[0]['chrom2'] == 'chr1'
        assert rows[0]['pos1'] == 1000
        assert rows[0]['pos2'] == 2000
        assert rows[0]['primary_type'] == SVTYPE.DEL
        assert rows[0]['alternate_type'] is None

    def test_breakend_alternate_type(self):
        record = VcfRecordType(
            id='b1',
            pos=5000,
            chrom='chr1',
            alts=['N]chr2:8000]'],
            ref='N',
            info=parse_info('SVTYPE=BND;SVTYPE2=INV;GENES=BRCA1,TP53'),
        )
        row = convert_record(record)[0]
        assert row['primary_type'] == SVTYPE.BND
        assert row['alternate_type'] == SVTYPE.INV
        assert row['chrom2'] == 'chr2'
        assert row['pos2'] == 8000
        assert sorted(row['genes']) == ['BRCA1', 'TP53']
        assert 'SVTYPE2' not in row['data']

    def test_symbolic_alt_without_svtype(self):
        record = VcfRecordType(
            id=None, pos=100, chrom='3', alts=['<INV>'], ref='N', info=parse_info('END=900')
        )
        row = convert_record(record)[0]
        assert row['primary_type'] == SVTYPE.INV
        assert row['pos2'] == 900
        assert 'id' not in row

    def test_sequence_deletion(self):
        record = VcfRecordType(
            id='s1', pos=100, chrom='3', alts=['A'], ref='ACGTACGTAC', info={}
        )
        row = convert_record(record)[0]
        assert row['primary_type'] == SVTYPE.DEL
        assert row['pos2'] == 109

    def test_sequence_insertion(self):
        record = VcfRecordType(id='s2', pos=100, chrom='3', alts=['ACGTACGT'], ref='A', info={})
        row = convert_record(record)[0]
        assert row['primary_type'] == SVTYPE.INS
        assert row['pos2'] == 100

    def test_multiple_alts(self):
        record = VcfRecordType(
            id='m1',
            pos=100,
            chrom='3',
            alts=['N]chr4:100]', 'N]chr5:200]'],
            ref='N',
            info=parse_info('SVTYPE=BND'),
        )
        rows = convert_record(record)
        assert [r['chrom2'] for r in rows] == ['chr4', 'chr5']
