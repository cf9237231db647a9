"""Audio command implementations."""

import click


@click.group(name="audio")
def audio_group():
    """Audio device commands."""
    pass


@audio_group.command(name="list")
@click.option("--low-latency", is_flag=True, help="Only show devices on a low-latency host API")
def list_audio(low_latency: bool):
    """List available audio output devices."""
    from padboard.audio.device import AudioDevice

    devices, api_names = AudioDevice.list_output_devices(low_latency_only=low_latency)
    default_device_id = AudioDevice.get_default_device()

    if not devices:
        if low_latency:
            click.echo(f"No {api_names} output devices found.")
        else:
            click.echo("No audio output devices found.")
        return

    click.echo("Available audio output devices:\n")
    for device_id, name, host_api in devices:
        marker = "  [Default]" if device_id == default_device_id else ""
        click.echo(f"[{device_id}] {name}{marker}")
        click.echo(f"    Host API: {host_api}")
