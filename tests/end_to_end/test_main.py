import os
import sys
from unittest.mock import patch

import pytest

from omsvc.compare import report_header
from omsvc.main import main

from ..util import get_data, glob_exists, read_report

ALL_SOURCES = ['annotsv', 'samplot', 'vcf-longranger', 'vcf-sniffles']


class TestMain:
    def run_main(self, output_dir, *options, sources=ALL_SOURCES):
        outputfile = os.path.join(str(output_dir), 'report.tab')
        args = ['omsvc', '-b', get_data('bionano.smap'), '-o', outputfile]
        if 'annotsv' in sources:
            args.extend(['-a', get_data('annotsv.tsv')])
        if 'samplot' in sources:
            args.extend(['-s', get_data('samplot.tsv')])
        if 'vcf-longranger' in sources:
            args.extend(['-vl', get_data('longranger.vcf')])
        if 'vcf-sniffles' in sources:
            args.extend(['-vs', get_data('sniffles.vcf')])
        args.extend(options)
        with patch.object(sys, 'argv', args):
            main()
        assert glob_exists(outputfile, n=1)
        with open(outputfile, 'r') as fh:
            header = fh.readline().rstrip('\n').split('\t')
        assert header == report_header([s for s in ALL_SOURCES if s in sources])
        return {row['base_id']: row for row in read_report(outputfile)}

    def test_all_sources(self, tmp_path):
        rows = self.run_main(tmp_path, '-d', '20', '-mp', '0.9')
        assert sorted(rows) == ['1', '2', '3', '4']

        deletion = rows['1']
        assert deletion['base_type'] == 'DEL'
        assert deletion['base_length'] == '1000'
        assert deletion['annotsv_id'] == 'ann1'
        assert deletion['annotsv_pos1_delta'] == '5'
        assert deletion['annotsv_pos2_delta'] == '10'
        assert deletion['samplot_id'] == 's1'
        assert deletion['vcf-longranger_id'] == 'lr1'
        assert deletion['vcf-longranger_pos1_delta'] == '0'
        assert deletion['vcf-sniffles_id'] == 'sn1'
        assert deletion['matched_sources'] == '4'
        assert deletion['common_genes'] == 'GENEA;GENEB'

        insertion = rows['2']
        assert insertion['annotsv_id'] == 'ann2'
        assert insertion['vcf-sniffles_id'] == 'sn2'
        assert insertion['vcf-sniffles_pos1_delta'] == '15'
        assert insertion['samplot_id'] == 'None'
        assert insertion['matched_sources'] == '2'
        assert insertion['common_genes'] == 'None'

        translocation = rows['3']
        assert translocation['base_chrom2'] == '12'
        assert translocation['base_length'] == 'None'
        assert translocation['annotsv_id'] == 'ann3'
        assert translocation['vcf-longranger_id'] == 'lr2'
        assert translocation['matched_sources'] == '2'

        inversion = rows['4']
        assert inversion['base_chrom1'] == 'X'
        assert inversion['samplot_id'] == 's2'
        assert inversion['vcf-longranger_id'] == 'lr3'
        assert inversion['vcf-longranger_type'] == 'BND/INV'
        assert inversion['matched_sources'] == '2'

    def test_exact_breakpoints(self, tmp_path):
        rows = self.run_main(tmp_path)
        assert rows['1']['matched_sources'] == '1'
        assert rows['1']['vcf-longranger_id'] == 'lr1'
        assert rows['2']['matched_sources'] == '0'
        assert rows['3']['vcf-longranger_id'] == 'lr2'
        assert rows['4']['vcf-longranger_id'] == 'lr3'

    def test_prefer_base_svtype(self, tmp_path):
        rows = self.run_main(tmp_path, '-d', '20', '-svt')
        assert rows['4']['vcf-longranger_id'] == 'None'
        assert rows['4']['samplot_id'] == 's2'

    def test_variant_type(self, tmp_path):
        rows = self.run_main(tmp_path, '-d', '20', '-t', 'DEL')
        assert len(rows) == 4
        assert rows['1']['matched_sources'] == '4'
        for base_id in ['2', '3', '4']:
            assert rows[base_id]['matched_sources'] == '0'

    def test_variant_type_env(self, tmp_path):
        with patch.dict(os.environ, {'OMSVC_VARIANT_TYPE': 'DEL'}):
            rows = self.run_main(tmp_path, '-d', '20')
        assert rows['1']['matched_sources'] == '4'
        for base_id in ['2', '3', '4']:
            assert rows[base_id]['matched_sources'] == '0'

    def test_variant_type_env_none(self, tmp_path):
        expected = self.run_main(tmp_path / 'unset', '-d', '20')
        with patch.dict(os.environ, {'OMSVC_VARIANT_TYPE': 'none'}):
            rows = self.run_main(tmp_path / 'none', '-d', '20')
        assert rows == expected
        assert rows['1']['matched_sources'] == '4'
        for base_id in ['2', '3', '4']:
            assert int(rows[base_id]['matched_sources']) >= 2

    def test_gene_intersection(self, tmp_path):
        rows = self.run_main(tmp_path, '-d', '20', '-g')
        assert rows['1']['annotsv_id'] == 'ann1'
        assert rows['1']['samplot_id'] == 's1'
        assert rows['1']['vcf-longranger_id'] == 'None'
        assert rows['1']['common_genes'] == 'GENEA;GENEB'
        assert rows['4']['matched_sources'] == '0'

    def test_minimal_proportion(self, tmp_path):
        rows = self.run_main(tmp_path, '-d', '20', '-mp', '0.995')
        assert rows['1']['vcf-longranger_id'] == 'lr1'
        assert rows['1']['annotsv_id'] == 'None'
        assert rows['4']['samplot_id'] == 's2'

    def test_single_source(self, tmp_path):
        rows = self.run_main(tmp_path, '-d', '20', sources=['vcf-sniffles'])
        assert rows['1']['vcf-sniffles_id'] == 'sn1'
        assert 'annotsv_id' not in rows['1']

    def test_keep_duplicates(self, tmp_path):
        outputfile = os.path.join(str(tmp_path), 'report.tab')
        args = [
            'omsvc',
            '-b',
            get_data('bionano.smap'),
            '-vl',
            get_data('longranger.vcf'),
            '-o',
            outputfile,
            '--keep_duplicates',
        ]
        with patch.object(sys, 'argv', args):
            main()
        assert len(read_report(outputfile)) == 5

    def test_processes(self, tmp_path):
        single = self.run_main(tmp_path / 'single', '-d', '20')
        multiple = self.run_main(tmp_path / 'multiple', '-d', '20', '--processes', '2')
        assert single == multiple

    def test_log_file(self, tmp_path):
        log = str(tmp_path / 'run.log')
        self.run_main(tmp_path, '--log', log, sources=['annotsv'])
        with open(log, 'r') as fh:
            content = fh.read()
        assert 'reading: ' in content
        assert 'annotsv: matched' in content


class TestArguments:
    def test_no_other_source_error(self, tmp_path):
        args = ['omsvc', '-b', get_data('bionano.smap'), '-o', str(tmp_path / 'report.tab')]
        with patch.object(sys, 'argv', args):
            with pytest.raises(SystemExit) as err:
                main()
        assert err.value.code == 2
        assert not os.path.exists(str(tmp_path / 'report.tab'))

    def test_missing_output_error(self):
        args = ['omsvc', '-b', get_data('bionano.smap'), '-a', get_data('annotsv.tsv')]
        with patch.object(sys, 'argv', args):
            with pytest.raises(SystemExit) as err:
                main()
        assert err.value.code == 2

    @pytest.mark.parametrize(
        'option,value', [('-d', '-1'), ('-d', 'ten'), ('-mp', '1.5'), ('-t', 'TRA')]
    )
    def test_bad_value_error(self, tmp_path, option, value):
        args = [
            'omsvc',
            '-b',
            get_data('bionano.smap'),
            '-a',
            get_data('annotsv.tsv'),
            '-o',
            str(tmp_path / 'report.tab'),
            option,
            value,
        ]
        with patch.object(sys, 'argv', args):
            with pytest.raises(SystemExit) as err:
                main()
        assert err.value.code == 2

    @pytest.mark.parametrize(
        'env_name,value',
        [
            ('OMSVC_DISTANCE_VARIANCE', '-5'),
            ('OMSVC_MINIMAL_PROPORTION', '2'),
            ('OMSVC_VARIANT_TYPE', 'DEL,TRA'),
        ],
    )
    def test_bad_env_value_error(self, tmp_path, env_name, value):
        outputfile = str(tmp_path / 'report.tab')
        args = [
            'omsvc',
            '-b',
            get_data('bionano.smap'),
            '-a',
            get_data('annotsv.tsv'),
            '-o',
            outputfile,
        ]
        with patch.dict(os.environ, {env_name: value}):
            with patch.object(sys, 'argv', args):
                with pytest.raises(SystemExit) as err:
                    main()
        assert err.value.code == 2
        assert not os.path.exists(outputfile)

    def test_missing_input_error(self, tmp_path):
        args = [
            'omsvc',
            '-b',
            get_data('missing.smap'),
            '-a',
            get_data('annotsv.tsv'),
            '-o',
            str(tmp_path / 'report.tab'),
        ]
        with patch.object(sys, 'argv', args):
            with pytest.raises(SystemExit) as err:
                main()
        assert err.value.code == 2

    def test_bad_record_error(self, tmp_path):
        outputfile = str(tmp_path / 'report.tab')
        args = [
            'omsvc',
            '-b',
            get_data('bionano.smap'),
            '-s',
            get_data('samplot_bad_position.tsv'),
            '-o',
            outputfile,
        ]
        with patch.object(sys, 'argv', args):
            with pytest.raises(ValueError):
                main()
        assert not os.path.exists(outputfile)

    def test_version(self, capsys):
        with patch.object(sys, 'argv', ['omsvc', '--version']):
            with pytest.raises(SystemExit) as err:
                main()
        assert err.value.code == 0
        assert 'version' in capsys.readouterr().out
