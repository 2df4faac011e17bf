"""Loaders for genomes, input tables and class names."""

from genecouple.io.tables import (
    read_family_table,
    read_fasta_labels,
    read_id_set,
    read_name_table,
    read_table,
    require_file,
)
from genecouple.io.names import MappingNameResolver, NameResolver
from genecouple.io.genomes import GenomeDirectory, genome_from_dict, load_genome

__all__ = [
    "read_family_table",
    "read_fasta_labels",
    "read_id_set",
    "read_name_table",
    "read_table",
    "require_file",
    "NameResolver",
    "MappingNameResolver",
    "GenomeDirectory",
    "genome_from_dict",
    "load_genome",
]
