"""Shared fixtures: small StringDB/BioGrid/ortholog input files and a config."""

from pathlib import Path

import pytest

from ppi_overlap.config.loader import load_config

ACTIONS_9606 = """item_id_a\titem_id_b\tmode\taction\tis_directional\ta_is_acting\tscore
9606.P1\t9606.P2\tbinding\t\tf\tf\t500
9606.P2\t9606.P1\tbinding\t\tf\tf\t500
9606.P3\t9606.P4\tbinding\t\tf\tf\t400
9606.P5\t9606.P6\tactivation\tactivation\tt\tt\t300
9606.P7\t9606.P8\tbinding\t\tf\tf\t200
"""

LINKS_9606 = """protein1 protein2 neighborhood experiments combined_score
9606.P1 9606.P2 0 300 500
9606.P3 9606.P4 0 150 400
9606.P5 9606.P6 0 200 300
9606.P7 9606.P8 0 0 200
"""

BIOGRID = """#BioGRID Interaction ID\tEntrez Gene Interactor A\tEntrez Gene Interactor B\tOrganism Interactor A\tOrganism Interactor B
1\t101\t102\t9606\t9606
2\t103\t104\t9606\t9606
3\t105\t105\t9606\t9606
4\t101\t106\t9606\t10090
5\t107\t108\t9606\t9606
6\t109\t110\t9606\t9606
"""

ENTREZ_2_STRING = """# NCBI taxid / entrez / STRING
9606\t101\t9606.P1
9606\t102\t9606.P2
9606\t103|111\t9606.P9
9606\t104\t9606.P10
9606\t109\t9606.P11
9606\t110\t9606.P11
9606\t108\t9606.P12
10090\t107\t10090.M1
"""

UNIPROT_2_STRING = """# species\tuniprot_ac|uniprot_id\tstring_id\tidentity\tbit_score
9606\tQ1|A_HUMAN\t9606.P1\t100.0\t500.0
9606\tQ2|B_HUMAN\t9606.P2\t100.0\t500.0
9606\tQ2b|B2_HUMAN\t9606.P2\t100.0\t480.0
9606\tQ3|C_HUMAN\t9606.P3\t100.0\t500.0
9606\tQ9|D_HUMAN\t9606.P9\t100.0\t500.0
9606\tQ10|E_HUMAN\t9606.P10\t100.0\t500.0
"""

ACTIONS_4932 = """item_id_a\titem_id_b\tmode\taction\tis_directional\ta_is_acting\tscore
4932.Y1\t4932.Y2\tbinding\t\tf\tf\t500
4932.Y3\t4932.Y4\tbinding\t\tf\tf\t500
4932.Y5\t4932.Y6\tbinding\t\tf\tf\t500
"""

LINKS_4932 = """protein1 protein2 neighborhood experiments combined_score
4932.Y1 4932.Y2 0 100 500
4932.Y3 4932.Y4 0 50 500
4932.Y5 4932.Y6 0 20 500
"""

YEAST_UNIPROT_2_STRING = """# species\tuniprot_ac|uniprot_id\tstring_id\tidentity\tbit_score
4932\tYU1|A_YEAST\t4932.Y1\t100.0\t500.0
4932\tYU2|B_YEAST\t4932.Y2\t100.0\t500.0
4932\tYU3|C_YEAST\t4932.Y3\t100.0\t500.0
4932\tYU3|C_YEAST\t4932.Y4\t100.0\t500.0
4932\tYU5|E_YEAST\t4932.Y5\t100.0\t500.0
"""

ORTHOLOGS = """YEAST|SGD=S1|UniProtKB=YU1\tHUMAN|HGNC=1|UniProtKB=H1\tLDO\tPTHR1\tFAM1
HUMAN|HGNC=2|UniProtKB=H2\tYEAST|SGD=S2|UniProtKB=YU2\tLDO\tPTHR2\tFAM2
HUMAN|HGNC=3|UniProtKB=H3\tHUMAN|HGNC=4|UniProtKB=H4\tP\tPTHR3\tFAM3
SCHPO|PomBase=X|UniProtKB=SP1\tHUMAN|HGNC=5|UniProtKB=H5\tLDO\tPTHR4\tFAM4
"""

INPUT_FILES = {
    "9606.protein.actions.txt": ACTIONS_9606,
    "9606.protein.links.full.txt": LINKS_9606,
    "biogrid.tab2.txt": BIOGRID,
    "entrez_2_string.tsv": ENTREZ_2_STRING,
    "uniprot_2_string.tsv": UNIPROT_2_STRING,
    "4932.protein.actions.txt": ACTIONS_4932,
    "4932.protein.links.full.txt": LINKS_4932,
    "yeast.uniprot_2_string.tsv": YEAST_UNIPROT_2_STRING,
    "orthologs.txt": ORTHOLOGS,
}


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """Directory populated with the sample input files."""
    directory = tmp_path / "data"
    directory.mkdir()
    for name, content in INPUT_FILES.items():
        (directory / name).write_text(content)
    return directory


def make_config_text(tmp_path: Path, data_dir: Path, **replacements: str) -> str:
    values = {
        "biogrid_file": "biogrid.tab2.txt",
        "links_file": "9606.protein.links.full.txt",
    }
    values.update(replacements)
    return f"""
data_dir: {data_dir}
output_dir: {tmp_path / "output"}
duckdb_path: {tmp_path / "test.duckdb"}
taxon_id: "9606"
stringdb:
  actions_file: 9606.protein.actions.txt
  links_file: {values["links_file"]}
  experiments_threshold: 0
mappings:
  stringdb_to_uniprot: uniprot_2_string.tsv
  entrez_to_stringdb: entrez_2_string.tsv
orthologs:
  file: orthologs.txt
  reference_species: HUMAN
  allow_bidirectional: true
biogrid:
  file: {values["biogrid_file"]}
species:
  - name: yeast
    taxon_id: "4932"
    actions_file: 4932.protein.actions.txt
    links_file: 4932.protein.links.full.txt
    stringdb_to_uniprot: yeast.uniprot_2_string.tsv
"""


@pytest.fixture
def config_path(tmp_path, data_dir) -> Path:
    """Config YAML pointing at the sample input files."""
    path = tmp_path / "config.yaml"
    path.write_text(make_config_text(tmp_path, data_dir))
    return path


@pytest.fixture
def test_config(config_path):
    return load_config(config_path)
