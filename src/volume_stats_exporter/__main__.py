from volume_stats_exporter.cli import app

if __name__ == "__main__":
    app()
