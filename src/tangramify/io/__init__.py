"""Reading Mapbox styles and writing Tangram scenes."""
