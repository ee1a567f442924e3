"""solrbridge - keeps a relational object store in sync with Solr and searches it."""

__version__ = "0.1.0"
