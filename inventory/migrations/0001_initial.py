import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product_name', models.CharField(max_length=100, unique=True, validators=[django.core.validators.MinLengthValidator(2), django.core.validators.RegexValidator('^[a-zA-Z0-9\\s\\-\\.,&()+]*$', message='El nombre contiene caracteres no permitidos.')], verbose_name='Nombre del Producto')),
                ('model', models.CharField(max_length=50, validators=[django.core.validators.RegexValidator('^[a-zA-Z0-9\\s\\-\\.,]+$', message='El modelo contiene caracteres no permitidos.')], verbose_name='Modelo')),
                ('price_per_quantity', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01')), django.core.validators.MaxValueValidator(Decimal('1000000.00'))], verbose_name='Precio Unitario')),
                ('unit_stock_quantity', models.PositiveIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(100000)], verbose_name='Stock')),
                ('total_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), editable=False, help_text='Precio unitario por stock. Se recalcula en cada guardado.', max_digits=14, verbose_name='Valor Total')),
                ('status', models.CharField(choices=[('ACTIVE', 'Activo'), ('INACTIVE', 'Inactivo'), ('DISCONTINUED', 'Descontinuado')], default='ACTIVE', max_length=20, verbose_name='Estado')),
            ],
            options={
                'verbose_name': 'Producto',
                'verbose_name_plural': 'Productos',
                'ordering': ['product_name'],
                'indexes': [
                    models.Index(fields=['product_name', 'model'], name='inv_name_model_idx'),
                    models.Index(fields=['unit_stock_quantity'], name='inv_stock_idx'),
                ],
            },
        ),
    ]
