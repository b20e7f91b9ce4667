"""Filter-state engine for faceted geospatial search against a Voyager/Solr backend."""

__version__ = "0.1.0"
